"""Cached access to stored partner sharing configuration."""
import logging
from typing import Any, Dict, Mapping, Optional

from django.conf import settings
from django.core.cache import caches
from django.db import transaction

from .descriptors import normalize_entity_type, sharing_config_key
from .models import PartnerSetting

logger = logging.getLogger(__name__)

_MISSING = object()

CACHE_KEY_PREFIX = "partner_sharing_config"


def config_cache_key(entity_type: str) -> str:
    return f"{CACHE_KEY_PREFIX}:{normalize_entity_type(entity_type)}"


class SharingConfigStore:
    """
    Reads ``<type>_sharing_config`` rows through a TTL cache.

    ``cache`` is anything exposing the Django cache API (get/set/delete).
    Absent configuration is cached too and returned as None; callers treat it
    as an empty allow-list.
    """

    def __init__(self, cache=None, ttl: Optional[int] = None):
        if cache is None:
            cache = caches[getattr(settings, "PARTNER_SHARING_CACHE_ALIAS", "default")]
        self.cache = cache
        self.ttl = ttl if ttl is not None else getattr(settings, "PARTNER_SHARING_CACHE_TTL", 600)

    def get(self, entity_type: str) -> Optional[Any]:
        key = config_cache_key(entity_type)
        value = self.cache.get(key, _MISSING)
        if value is not _MISSING:
            return value

        value = (
            PartnerSetting.objects.filter(setting_key=sharing_config_key(entity_type))
            .values_list("setting_value", flat=True)
            .first()
        )
        # last writer wins if two requests repopulate concurrently
        self.cache.set(key, value, self.ttl)
        return value

    def put(self, entity_type: str, config: Mapping[str, Any]) -> PartnerSetting:
        setting, _ = PartnerSetting.objects.update_or_create(
            setting_key=sharing_config_key(entity_type),
            defaults={"setting_value": dict(config)},
        )
        self.invalidate(entity_type)
        return setting

    def invalidate(self, entity_type: str) -> None:
        key = config_cache_key(entity_type)
        self.cache.delete(key)
        # a read inside the open transaction window can re-cache the old row
        transaction.on_commit(lambda: self.cache.delete(key))

    def all(self) -> Dict[str, Any]:
        return dict(PartnerSetting.objects.values_list("setting_key", "setting_value"))
