"""Serializers for partner sharing settings and projected records."""
from rest_framework import serializers

from .descriptors import UnknownEntityType, normalize_entity_type

SHARING_CONFIG_SUFFIX = "_sharing_config"


class ProjectedFieldsMixin:
    """
    Emits only the fields present in the ``select_plan`` found in the
    serializer context. Without a plan (staff requests) every field is
    emitted.

    ``projection_key`` is None for the root serializer and the relation key
    (``companyOverview``, ``deals``...) for nested ones.
    """

    projection_key = None

    def get_fields(self):
        fields = super().get_fields()
        plan = self.context.get("select_plan")
        if plan is None:
            return fields
        visible = plan.visible_fields(self.projection_key)
        return {name: field for name, field in fields.items() if name in visible}


class PartnerSettingsUpdateSerializer(serializers.Serializer):
    settings = serializers.DictField(child=serializers.DictField(), allow_empty=False)

    def validate_settings(self, value):
        for key in value:
            if not key.endswith(SHARING_CONFIG_SUFFIX):
                continue
            try:
                normalize_entity_type(key[: -len(SHARING_CONFIG_SUFFIX)])
            except UnknownEntityType:
                raise serializers.ValidationError(f"Unknown sharing entity type in '{key}'.")
        return value


def sharing_entity_type(setting_key: str):
    """``investor_sharing_config`` -> ``buyer``; None for non-sharing keys."""
    if not setting_key.endswith(SHARING_CONFIG_SUFFIX):
        return None
    return normalize_entity_type(setting_key[: -len(SHARING_CONFIG_SUFFIX)])
