"""Composition root for partner field visibility."""
import logging
from typing import List, Optional, Tuple

from django.db.models import QuerySet

from .assembler import ResponseAssembler
from .descriptors import normalize_entity_type
from .planner import ProjectionPlanner, SelectPlan
from .projector import QueryProjector
from .resolver import FieldSetResolver, ResolvedFieldSet
from .store import SharingConfigStore

logger = logging.getLogger(__name__)


class PartnerSharingEngine:
    """
    Only partner-class requests should go through the engine. Staff and
    admin views bypass it and load full records.

    Every collaborator can be swapped, which is how tests inject a plain
    locmem cache or a fake store.
    """

    def __init__(
        self,
        store: Optional[SharingConfigStore] = None,
        resolver: Optional[FieldSetResolver] = None,
        planner: Optional[ProjectionPlanner] = None,
        projector: Optional[QueryProjector] = None,
        assembler: Optional[ResponseAssembler] = None,
    ):
        self.store = store or SharingConfigStore()
        self.resolver = resolver or FieldSetResolver()
        self.planner = planner or ProjectionPlanner()
        self.projector = projector or QueryProjector()
        self.assembler = assembler or ResponseAssembler()

    def allowed_fields(self, entity_type: str) -> ResolvedFieldSet:
        entity_type = normalize_entity_type(entity_type)
        return self.resolver.resolve(self.store.get(entity_type), entity_type)

    def select_plan(self, entity_type: str) -> Tuple[ResolvedFieldSet, SelectPlan]:
        resolved = self.allowed_fields(entity_type)
        return resolved, self.planner.plan(resolved, entity_type)

    def project(self, queryset: QuerySet, entity_type: str) -> Tuple[QuerySet, ResolvedFieldSet, SelectPlan]:
        resolved, plan = self.select_plan(entity_type)
        return self.projector.project(queryset, plan), resolved, plan

    def unknown_fields(self, entity_type: str, raw_config) -> List[str]:
        """Configured names that no column backs, for admin feedback."""
        resolved = self.resolver.resolve(raw_config, entity_type)
        return self.planner.unknown_fields(resolved, entity_type)
