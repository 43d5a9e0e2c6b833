"""
Entity descriptors: which model, relations and structural columns the sharing
engine works with for each entity type.

Apps owning the models register their descriptors at startup
(see ``app.workspace.prospects.sharing``).
"""
import logging
from dataclasses import dataclass
from typing import Dict, FrozenSet, List, Optional, Tuple, Type

from django.db import models

logger = logging.getLogger(__name__)

# "investor"/"target" are used interchangeably with "buyer"/"seller" across the product
ENTITY_TYPE_ALIASES: Dict[str, str] = {
    "buyer": "buyer",
    "investor": "buyer",
    "seller": "seller",
    "target": "seller",
}


class UnknownEntityType(ValueError):
    pass


def normalize_entity_type(entity_type: str) -> str:
    key = (entity_type or "").strip().lower()
    try:
        return ENTITY_TYPE_ALIASES[key]
    except KeyError:
        raise UnknownEntityType(f"Unknown entity type: {entity_type!r}") from None


def sharing_config_key(entity_type: str) -> str:
    return f"{normalize_entity_type(entity_type)}_sharing_config"


def field_lookup(model: Type[models.Model]) -> Dict[str, str]:
    """Map both field names and attnames (``hq_country_id``) to field names."""
    lookup = {}
    for field in model._meta.concrete_fields:
        lookup[field.attname] = field.name
        lookup[field.name] = field.name
    return lookup


@dataclass(frozen=True)
class RelationDescriptor:
    key: str                                   # camelCase key used in config and meta
    attr: str                                  # ORM attribute to prefetch
    model: Type[models.Model]
    fk_field: Optional[str] = None             # root FK field for forward relations
    required_fields: FrozenSet[str] = frozenset()
    nested: Tuple[str, ...] = ()               # select_related on every load, never gated
    fixed_fields: Optional[FrozenSet[str]] = None    # loaded as a whole when any key is enabled

    @property
    def identifier(self) -> str:
        return self.model._meta.pk.name

    @property
    def config_prefix(self) -> str:
        return self.attr

    @property
    def is_configurable(self) -> bool:
        return self.fixed_fields is None


@dataclass(frozen=True)
class EntityDescriptor:
    entity_type: str
    model: Type[models.Model]
    identifier: str = "id"
    public_id_field: str = ""
    structural_fields: Tuple[str, ...] = ("pinned", "created_at", "status", "updated_at")
    relations: Tuple[RelationDescriptor, ...] = ()

    def relation(self, key: str) -> Optional[RelationDescriptor]:
        for relation in self.relations:
            if relation.key == key:
                return relation
        return None

    def shareable_fields(self) -> List[str]:
        """Every dotted key an administrator may enable for this entity type."""
        fk_fields = {r.fk_field for r in self.relations if r.fk_field}
        keys = [
            f.name for f in self.model._meta.concrete_fields
            if f.name not in fk_fields
            and f.name != self.identifier
            and f.name not in self.structural_fields
        ]
        for relation in self.relations:
            if not relation.is_configurable:
                keys.extend(
                    f"{relation.config_prefix}.{name}"
                    for name in sorted(relation.fixed_fields)
                    if name != relation.identifier
                )
                continue
            keys.extend(
                f"{relation.config_prefix}.{f.name}"
                for f in relation.model._meta.concrete_fields
                if f.name != relation.identifier
            )
        return keys


_registry: Dict[str, EntityDescriptor] = {}


def register_descriptor(descriptor: EntityDescriptor) -> None:
    entity_type = normalize_entity_type(descriptor.entity_type)
    if entity_type in _registry and _registry[entity_type] is not descriptor:
        logger.debug("Replacing sharing descriptor for %s", entity_type)
    _registry[entity_type] = descriptor


def get_descriptor(entity_type: str) -> EntityDescriptor:
    entity_type = normalize_entity_type(entity_type)
    try:
        return _registry[entity_type]
    except KeyError:
        raise UnknownEntityType(f"No sharing descriptor registered for {entity_type!r}") from None


def registered_descriptors() -> List[EntityDescriptor]:
    return [_registry[key] for key in sorted(_registry)]
