"""Helper functions for writing audit logs."""
from typing import Optional, Mapping, Any

from django.contrib.contenttypes.models import ContentType

from app.core.models import AuditLog


def _client_ip(request) -> Optional[str]:
    forwarded = request.META.get("HTTP_X_FORWARDED_FOR")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.META.get("REMOTE_ADDR") or None


def record_audit(*, actor=None, obj=None, action: str, description: str = "", metadata: Optional[Mapping[str, Any]] = None, request=None) -> AuditLog:
    metadata = dict(metadata or {})
    content_type = None
    object_id = None
    if obj is not None:
        content_type = ContentType.objects.get_for_model(obj.__class__)
        object_id = getattr(obj, "pk", None)
    ip_address = None
    user_agent = ""
    if request is not None:
        ip_address = _client_ip(request)
        user_agent = request.META.get("HTTP_USER_AGENT", "")[:500]
        if actor is None and getattr(request, "user", None) is not None and request.user.is_authenticated:
            actor = request.user
    return AuditLog.objects.create(
        actor=actor,
        actor_email=getattr(actor, "email", "") or "",
        content_type=content_type,
        object_id=object_id,
        action=action,
        description=description,
        metadata=metadata,
        ip_address=ip_address,
        user_agent=user_agent,
    )
