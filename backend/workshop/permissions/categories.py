# Overview: Capability category constants for grouping related capabilities.


class PermissionCategory:
    """Capability categories, matching the dashboard's navigation sections."""
    INVENTORY = "INVENTORY"
    JOB_CARDS = "JOB_CARDS"
    INVOICES = "INVOICES"
    USERS = "USERS"
    AUDIT = "AUDIT"
    DASHBOARD = "DASHBOARD"
