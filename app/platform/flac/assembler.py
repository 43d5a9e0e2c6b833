"""Wraps projected records with their allowed-field metadata."""
from typing import Any, Dict, Optional

from .planner import SelectPlan
from .resolver import ResolvedFieldSet


class ResponseAssembler:

    def serialize(self, serializer_class, instances, plan: Optional[SelectPlan] = None, many: bool = True, context=None):
        context = dict(context or {})
        context["select_plan"] = plan
        return serializer_class(instances, many=many, context=context).data

    def allowed_fields_meta(self, resolved: Optional[ResolvedFieldSet]):
        return resolved.as_dict() if resolved is not None else None

    def assemble(self, records, resolved: Optional[ResolvedFieldSet]) -> Dict[str, Any]:
        return {
            "data": records,
            "meta": {"allowed_fields": self.allowed_fields_meta(resolved)},
        }

    def assemble_page(self, records, resolved: Optional[ResolvedFieldSet], page) -> Dict[str, Any]:
        """``page`` is a django.core.paginator.Page."""
        paginator = page.paginator
        return {
            "data": records,
            "meta": {
                "total": paginator.count,
                "current_page": page.number,
                "last_page": paginator.num_pages,
                "per_page": paginator.per_page,
                "allowed_fields": self.allowed_fields_meta(resolved),
            },
        }
