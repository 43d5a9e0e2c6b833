"""Derives the concrete select plan from an allow-list."""
import logging
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Mapping, Optional, Set, Tuple

from .descriptors import EntityDescriptor, field_lookup, get_descriptor
from .resolver import IDENTIFIER, ResolvedFieldSet

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SelectPlan:
    """
    Columns to fetch per table. Always a superset of the allow-list it was
    planned from, except for non-configurable relations (deals), which keep
    their fixed projection.

    ``root`` is what the query selects; ``visible_root`` is what the
    serializer may emit (identifier plus allowed root fields). Structural
    columns are selected for ordering and filtering but never emitted.
    """

    entity_type: str
    root: FrozenSet[str]
    relationships: Mapping[str, FrozenSet[str]] = field(default_factory=dict)
    nested: Mapping[str, Tuple[str, ...]] = field(default_factory=dict)
    attrs: Mapping[str, str] = field(default_factory=dict)
    visible_root: FrozenSet[str] = frozenset()

    def visible_fields(self, relation_key: Optional[str] = None) -> FrozenSet[str]:
        """Serializer field names allowed at the root (None) or inside a relation."""
        if relation_key is None:
            return self.visible_root | frozenset(self.attrs[key] for key in self.relationships)
        return self.relationships.get(relation_key, frozenset()) | frozenset(self.nested.get(relation_key, ()))


class ProjectionPlanner:
    """
    Root: identifier, structural columns, allowed root fields and the FK of
    every loaded relation. Relations: identifier, required columns (hq_country
    on the company overview) and allowed attributes. Fixed relations load
    only when one of their keys is enabled and then keep their projection.
    """

    def _partition(self, resolved: ResolvedFieldSet, descriptor: EntityDescriptor):
        """Split the allow-list into known field names and unknown configured names."""
        unknown: List[str] = []

        root_lookup = field_lookup(descriptor.model)
        # relation FKs are only selected through their dotted keys
        fk_fields = {r.fk_field for r in descriptor.relations if r.fk_field}
        root: Set[str] = set()
        for name in resolved.root:
            field_name = root_lookup.get(name)
            if field_name is None or field_name in fk_fields:
                unknown.append(name)
            else:
                root.add(field_name)

        relationships: Dict[str, Set[str]] = {}
        for key, attributes in resolved.relationships.items():
            relation = descriptor.relation(key)
            if relation is None:
                named = [f"{key}.{a}" for a in sorted(attributes) if a != IDENTIFIER]
                unknown.extend(named or [key])
                continue
            lookup = field_lookup(relation.model)
            if not relation.is_configurable:
                unknown.extend(
                    f"{key}.{a}" for a in sorted(attributes)
                    if lookup.get(a) not in relation.fixed_fields
                )
                continue
            columns = relationships.setdefault(key, set())
            for attribute in attributes:
                field_name = lookup.get(attribute)
                if field_name is None:
                    unknown.append(f"{key}.{attribute}")
                else:
                    columns.add(field_name)

        return root, relationships, sorted(unknown)

    def unknown_fields(self, resolved: ResolvedFieldSet, entity_type: str) -> List[str]:
        return self._partition(resolved, get_descriptor(entity_type))[2]

    def plan(self, resolved: ResolvedFieldSet, entity_type: str) -> SelectPlan:
        descriptor = get_descriptor(entity_type)
        allowed_root, allowed_relationships, unknown = self._partition(resolved, descriptor)
        if unknown:
            logger.warning("Ignoring unknown %s sharing fields: %s", descriptor.entity_type, ", ".join(unknown))

        root = {descriptor.identifier, *descriptor.structural_fields} | allowed_root
        relationships: Dict[str, FrozenSet[str]] = {}
        nested: Dict[str, Tuple[str, ...]] = {}
        attrs: Dict[str, str] = {}

        for relation in descriptor.relations:
            configured = relation.key in allowed_relationships or (
                relation.key in resolved.relationships and not relation.is_configurable
            )
            if not configured:
                continue

            if relation.is_configurable:
                columns = {relation.identifier} | set(relation.required_fields) | allowed_relationships[relation.key]
            else:
                columns = set(relation.fixed_fields)

            relationships[relation.key] = frozenset(columns)
            attrs[relation.key] = relation.attr
            if relation.nested:
                nested[relation.key] = tuple(relation.nested)
            if relation.fk_field:
                root.add(relation.fk_field)

        return SelectPlan(
            entity_type=descriptor.entity_type,
            root=frozenset(root),
            relationships=relationships,
            nested=nested,
            attrs=attrs,
            visible_root=frozenset({descriptor.identifier} | allowed_root),
        )
