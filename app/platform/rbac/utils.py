"""
RBAC Utility Functions
Role checks used to route a request into the partner or the staff branch.
"""

import logging

from .constants import PARTNER_ROLE_CODES, ADMIN_ROLE_CODES

logger = logging.getLogger(__name__)


def _is_authenticated(user) -> bool:
    return bool(user and hasattr(user, 'is_authenticated') and user.is_authenticated)


def _role_code(user) -> str:
    return (getattr(user, 'role', None) or "").strip().lower()


def get_partner_profile(user):
    """
    Return the Partner record linked to a user, or None.
    Imported lazily: prospects depends on accounts, not the other way round.
    """
    if not _is_authenticated(user):
        return None
    from app.workspace.prospects.models import Partner
    return Partner.objects.filter(user=user).first()


def is_partner(user) -> bool:
    """
    Partner-class requester: partner role, or a user linked to a Partner record.
    Superusers are never partner-class.
    """
    if not _is_authenticated(user):
        return False
    if getattr(user, 'is_superuser', False):
        return False
    if _role_code(user) in PARTNER_ROLE_CODES:
        return True
    return get_partner_profile(user) is not None


def is_admin(user) -> bool:
    """Check if user may administer partner sharing."""
    if not _is_authenticated(user):
        return False
    if getattr(user, 'is_superuser', False):
        return True
    return _role_code(user) in ADMIN_ROLE_CODES
