"""
Role-Based Access Control (RBAC)
Decides which branch a request takes: staff/admin (unrestricted) or partner (projected).
"""

from .constants import Roles, PARTNER_ROLE_CODES

__all__ = [
    "Roles",
    "PARTNER_ROLE_CODES",
]

# Utils and permission classes touch the ORM and are imported where needed:
#   from app.platform.rbac.utils import is_partner, is_admin, get_partner_profile
#   from app.platform.rbac.permissions import IsPartner, IsAdminRole
