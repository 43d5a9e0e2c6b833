"""Turns a raw sharing configuration into an allow-list."""
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Mapping, Optional

logger = logging.getLogger(__name__)

IDENTIFIER = "id"
SEPARATOR = "."

# Configuration keys whose name differs from the stored column
FIELD_ALIASES: Dict[str, str] = {
    "niche_tags": "niche_industry",
}


def to_camel(value: str) -> str:
    """``company_overview`` -> ``companyOverview``; already camel-cased keys pass through."""
    words = [w for w in re.split(r"[\s_-]+", value) if w]
    if not words:
        return ""
    head, tail = words[0], words[1:]
    return head[:1].lower() + head[1:] + "".join(w[:1].upper() + w[1:] for w in tail)


@dataclass(frozen=True)
class ResolvedFieldSet:
    root: FrozenSet[str] = frozenset({IDENTIFIER})
    relationships: Mapping[str, FrozenSet[str]] = field(default_factory=dict)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "root": sorted(self.root),
            "relationships": {
                key: sorted(attributes)
                for key, attributes in sorted(self.relationships.items())
            },
        }

    def allows(self, dotted: str) -> bool:
        """Whether ``attr`` or ``relation.attr`` (config spelling) is visible."""
        if SEPARATOR in dotted:
            relation, attribute = dotted.split(SEPARATOR)[:2]
            return attribute in self.relationships.get(to_camel(relation), ())
        return dotted in self.root


class FieldSetResolver:
    """
    Parses ``{"field" | "relation.field": bool}`` into root fields plus
    per-relation attribute sets. Only values that are exactly ``True``
    enable a field; anything else, including "true" and 1, is disabled.
    """

    def __init__(self, aliases: Optional[Mapping[str, str]] = None, identifier: str = IDENTIFIER):
        self.aliases = dict(FIELD_ALIASES if aliases is None else aliases)
        self.identifier = identifier

    def alias(self, name: str) -> str:
        return self.aliases.get(name, name)

    def enabled_fields(self, raw_config: Any):
        if not isinstance(raw_config, Mapping):
            return []
        return [key for key, value in raw_config.items() if value is True and isinstance(key, str)]

    def resolve(self, raw_config: Any, entity_type: Optional[str] = None) -> ResolvedFieldSet:
        if not isinstance(raw_config, Mapping):
            logger.info("No partner sharing settings for type: %s", entity_type or "unknown")
            return ResolvedFieldSet(root=frozenset({self.identifier}), relationships={})

        root = {self.identifier}
        relationships: Dict[str, set] = {}

        for name in self.enabled_fields(raw_config):
            if SEPARATOR in name:
                parts = name.split(SEPARATOR)
                relation = to_camel(parts[0])
                attribute = self.alias(parts[1])
                relationships.setdefault(relation, {self.identifier}).add(attribute)
            else:
                root.add(self.alias(name))

        logger.debug("Partner sharing enabled fields for %s: root=%s relationships=%s",
                     entity_type, sorted(root), sorted(relationships))

        return ResolvedFieldSet(
            root=frozenset(root),
            relationships={key: frozenset(values) for key, values in relationships.items()},
        )
