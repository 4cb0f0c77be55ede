# Overview: Utility functions for permission lookups and validation.

from .definitions import NAVIGATION, PERMISSION_DEFINITIONS, ROLE_PERMISSIONS, ROLES


def get_all_permission_codes():
    """Get list of all permission codes."""
    return [perm[0] for perm in PERMISSION_DEFINITIONS]


def get_permissions_by_category(category):
    """Get all permissions in a category."""
    return [perm for perm in PERMISSION_DEFINITIONS if perm[3] == category]


def get_permission_definition(code):
    """Get full definition for a permission code."""
    for perm in PERMISSION_DEFINITIONS:
        if perm[0] == code:
            return {
                "code": perm[0],
                "name": perm[1],
                "description": perm[2],
                "category": perm[3],
            }
    return None


def validate_permission_code(code):
    """Check if a permission code is valid."""
    return code in get_all_permission_codes()


def validate_role(role):
    """Check if a role tag is one of the four fixed roles."""
    return role in ROLES


def role_has_permission(role, code):
    """Unknown roles have no permissions (fail closed)."""
    return code in ROLE_PERMISSIONS.get(role, frozenset())


def get_navigation(role):
    """Menu sections visible to a role, in display order."""
    return [
        {"id": section_id, "name": name}
        for section_id, name, required in NAVIGATION
        if validate_role(role) and (required is None or role_has_permission(role, required))
    ]
