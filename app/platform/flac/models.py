"""Partner sharing settings."""
from django.db import models

from app.core.models import CoreBaseModel


class PartnerSetting(CoreBaseModel):
    """
    Key/value store for partner portal settings.

    Sharing configuration lives under ``<entity_type>_sharing_config`` as a flat
    ``{"field" | "relation.field": bool}`` mapping.
    """

    setting_key = models.CharField(max_length=128, unique=True)
    setting_value = models.JSONField(default=dict, blank=True)

    class Meta:
        db_table = "partner_settings"
        ordering = ["setting_key"]

    def __str__(self):
        return self.setting_key
