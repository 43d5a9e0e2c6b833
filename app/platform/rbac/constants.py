"""
RBAC Constants - Role definitions
"""

from enum import Enum


class Roles(str, Enum):
    """Application roles, mirrored by User.Role."""
    ADMIN = "Admin"
    STAFF = "Staff"
    PARTNER = "Partner"


# Role codes treated as partner-class (case-insensitive)
PARTNER_ROLE_CODES = frozenset({Roles.PARTNER.value.lower()})

# Role codes allowed to manage partner sharing configuration
ADMIN_ROLE_CODES = frozenset({Roles.ADMIN.value.lower()})
