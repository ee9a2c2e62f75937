# Overview: Capability system package.

from .categories import PermissionCategory
from .definitions import (
    PERMISSION_DEFINITIONS,
    DASHBOARD_PERMISSIONS,
    INVENTORY_PERMISSIONS,
    JOB_CARD_PERMISSIONS,
    INVOICE_PERMISSIONS,
    USER_PERMISSIONS,
    AUDIT_PERMISSIONS,
)
from .roles import DEFAULT_ROLE_PERMISSIONS
from .helpers import (
    get_all_permission_codes,
    get_permissions_by_category,
    get_permission_definition,
    get_role_permissions,
    validate_permission_code,
)

__all__ = [
    "PermissionCategory",
    "PERMISSION_DEFINITIONS",
    "DASHBOARD_PERMISSIONS",
    "INVENTORY_PERMISSIONS",
    "JOB_CARD_PERMISSIONS",
    "INVOICE_PERMISSIONS",
    "USER_PERMISSIONS",
    "AUDIT_PERMISSIONS",
    "DEFAULT_ROLE_PERMISSIONS",
    "get_all_permission_codes",
    "get_permissions_by_category",
    "get_permission_definition",
    "get_role_permissions",
    "validate_permission_code",
]
