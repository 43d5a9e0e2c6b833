"""Drop cached sharing configuration whenever a PartnerSetting row changes."""
import logging

from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from .descriptors import UnknownEntityType
from .models import PartnerSetting
from .store import SharingConfigStore

logger = logging.getLogger(__name__)

SUFFIX = "_sharing_config"


@receiver(post_save, sender=PartnerSetting)
@receiver(post_delete, sender=PartnerSetting)
def invalidate_sharing_config(sender, instance, **kwargs):
    if not instance.setting_key.endswith(SUFFIX):
        return
    entity_type = instance.setting_key[: -len(SUFFIX)]
    try:
        SharingConfigStore().invalidate(entity_type)
    except UnknownEntityType:
        logger.info("PartnerSetting %s does not map to a known entity type", instance.setting_key)
