"""Applies a SelectPlan to a queryset."""
import logging

from django.db.models import Prefetch, QuerySet

from .descriptors import get_descriptor
from .planner import SelectPlan

logger = logging.getLogger(__name__)


class QueryProjector:
    """
    Restricts the root query to ``plan.root`` and loads each planned relation
    with its own column list. Relations absent from the plan are never
    fetched.
    """

    def relation_queryset(self, relation, columns) -> QuerySet:
        qs = relation.model._default_manager.only(*sorted(columns))
        if relation.nested:
            qs = qs.select_related(*relation.nested)
        return qs

    def project(self, queryset: QuerySet, plan: SelectPlan) -> QuerySet:
        descriptor = get_descriptor(plan.entity_type)
        prefetches = []
        for key, columns in plan.relationships.items():
            relation = descriptor.relation(key)
            prefetches.append(Prefetch(relation.attr, queryset=self.relation_queryset(relation, columns)))

        logger.debug("Projecting %s: root=%s relations=%s", plan.entity_type, sorted(plan.root), sorted(plan.relationships))
        queryset = queryset.only(*sorted(plan.root))
        if prefetches:
            queryset = queryset.prefetch_related(*prefetches)
        return queryset
