# Overview: Permission category constants for grouping related permissions.


class PermissionCategory:
    """Permission categories for organization and menu display."""
    INVENTORY = "INVENTORY"
    SALES = "SALES"
    AUDIT = "AUDIT"
    SUPPLIERS = "SUPPLIERS"
    USERS = "USERS"
