"""Shared abstract models and mixins."""
import uuid
from django.db import models
from django.utils import timezone


class UUIDPrimaryKeyModel(models.Model):
    """Abstract model that sets a UUID primary key."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    class Meta:
        abstract = True


class TimestampedModel(models.Model):
    """Adds created/updated timestamps."""

    created_at = models.DateTimeField(default=timezone.now, editable=False)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class CoreBaseModel(UUIDPrimaryKeyModel, TimestampedModel):
    """Default base model to inherit across apps."""

    class Meta:
        abstract = True
