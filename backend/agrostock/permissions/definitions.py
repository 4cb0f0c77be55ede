# Overview: All permission definitions and the role capability table.
# Each permission is defined as: (code, name, description, category)

from .categories import PermissionCategory


# -- ROLES --

ROLE_ADMIN = "ADMIN"
ROLE_STORE_MANAGER = "STORE_MANAGER"
ROLE_STORE_KEEPER = "STORE_KEEPER"
ROLE_AUDITOR = "AUDITOR"

ROLES = (ROLE_ADMIN, ROLE_STORE_MANAGER, ROLE_STORE_KEEPER, ROLE_AUDITOR)


# -- INVENTORY --

INVENTORY_PERMISSIONS = [
    (
        "APPROVE_INTAKE",
        "Approve Intake",
        "Approve or reject PENDING stock entries",
        PermissionCategory.INVENTORY,
    ),
    (
        "RECORD_INTAKE",
        "Record Intake",
        "Record incoming batches as PENDING stock entries",
        PermissionCategory.INVENTORY,
    ),
    (
        "MANAGE_PRODUCTS",
        "Manage Products",
        "Add products to the catalog",
        PermissionCategory.INVENTORY,
    ),
]


# -- SALES --

SALES_PERMISSIONS = [
    (
        "RECORD_SALE",
        "Record Sale",
        "Process a sale and deduct stock",
        PermissionCategory.SALES,
    ),
]


# -- AUDIT --

AUDIT_PERMISSIONS = [
    (
        "VIEW_AUDIT",
        "View Audit Log",
        "Read the append-only audit trail",
        PermissionCategory.AUDIT,
    ),
]


# -- SUPPLIERS --

SUPPLIER_PERMISSIONS = [
    (
        "MANAGE_SUPPLIERS",
        "Manage Suppliers",
        "Register partner suppliers",
        PermissionCategory.SUPPLIERS,
    ),
]


# -- USERS --

USER_PERMISSIONS = [
    (
        "MANAGE_USERS",
        "Manage Users",
        "Create staff accounts and assign roles",
        PermissionCategory.USERS,
    ),
]


PERMISSION_DEFINITIONS = (
    INVENTORY_PERMISSIONS
    + SALES_PERMISSIONS
    + AUDIT_PERMISSIONS
    + SUPPLIER_PERMISSIONS
    + USER_PERMISSIONS
)


# Single source of truth for authorization. Operations consult this table
# themselves; the view layer only mirrors it.
ROLE_PERMISSIONS = {
    ROLE_ADMIN: frozenset({
        "APPROVE_INTAKE",
        "RECORD_INTAKE",
        "MANAGE_PRODUCTS",
        "RECORD_SALE",
        "VIEW_AUDIT",
        "MANAGE_SUPPLIERS",
        "MANAGE_USERS",
    }),
    ROLE_STORE_MANAGER: frozenset({
        "APPROVE_INTAKE",
        "RECORD_INTAKE",
        "MANAGE_PRODUCTS",
        "RECORD_SALE",
        "MANAGE_SUPPLIERS",
    }),
    ROLE_STORE_KEEPER: frozenset({
        "RECORD_INTAKE",
        "RECORD_SALE",
    }),
    ROLE_AUDITOR: frozenset({
        "VIEW_AUDIT",
    }),
}


# Menu sections and the permission (if any) that gates them.
NAVIGATION = [
    ("dashboard", "Dashboard", None),
    ("inventory", "Inventory", None),
    ("sales", "Sales", None),
    ("audit", "Auditing", "VIEW_AUDIT"),
    ("suppliers", "Suppliers", "MANAGE_SUPPLIERS"),
    ("users", "Security & Users", "MANAGE_USERS"),
]
