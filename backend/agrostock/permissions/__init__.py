# Overview: Permission system package.
# Re-exports all public APIs for convenient imports.

from .categories import PermissionCategory
from .definitions import (
    PERMISSION_DEFINITIONS,
    INVENTORY_PERMISSIONS,
    SALES_PERMISSIONS,
    AUDIT_PERMISSIONS,
    SUPPLIER_PERMISSIONS,
    USER_PERMISSIONS,
    ROLE_PERMISSIONS,
    ROLES,
    ROLE_ADMIN,
    ROLE_STORE_MANAGER,
    ROLE_STORE_KEEPER,
    ROLE_AUDITOR,
)
from .helpers import (
    get_all_permission_codes,
    get_permissions_by_category,
    get_permission_definition,
    validate_permission_code,
    validate_role,
    role_has_permission,
    get_navigation,
)

__all__ = [
    "PermissionCategory",
    "PERMISSION_DEFINITIONS",
    "INVENTORY_PERMISSIONS",
    "SALES_PERMISSIONS",
    "AUDIT_PERMISSIONS",
    "SUPPLIER_PERMISSIONS",
    "USER_PERMISSIONS",
    "ROLE_PERMISSIONS",
    "ROLES",
    "ROLE_ADMIN",
    "ROLE_STORE_MANAGER",
    "ROLE_STORE_KEEPER",
    "ROLE_AUDITOR",
    "get_all_permission_codes",
    "get_permissions_by_category",
    "get_permission_definition",
    "validate_permission_code",
    "validate_role",
    "role_has_permission",
    "get_navigation",
]
