# Overview: All capability definitions organized by category.
# Each capability is defined as: (code, name, description, category)

from .categories import PermissionCategory


# -- DASHBOARD --

DASHBOARD_PERMISSIONS = [
    (
        "VIEW_DASHBOARD",
        "View Dashboard",
        "View workshop summary statistics",
        PermissionCategory.DASHBOARD,
    ),
]


# -- INVENTORY --

INVENTORY_PERMISSIONS = [
    (
        "VIEW_INVENTORY",
        "View Inventory",
        "View products, quantities and stock status",
        PermissionCategory.INVENTORY,
    ),
    (
        "MANAGE_PRODUCTS",
        "Manage Products",
        "Add products and edit existing ones",
        PermissionCategory.INVENTORY,
    ),
    (
        "DELETE_PRODUCTS",
        "Delete Products",
        "Permanently remove products from inventory",
        PermissionCategory.INVENTORY,
    ),
]


# -- JOB CARDS --

JOB_CARD_PERMISSIONS = [
    (
        "VIEW_JOB_CARDS",
        "View Job Cards",
        "View repair orders and their status",
        PermissionCategory.JOB_CARDS,
    ),
    (
        "CREATE_JOB_CARD",
        "Create Job Card",
        "Open a new repair order",
        PermissionCategory.JOB_CARDS,
    ),
    (
        "CHANGE_JOB_STATUS",
        "Change Job Status",
        "Advance a job card through pending, in progress and completed",
        PermissionCategory.JOB_CARDS,
    ),
]


# -- INVOICES --

INVOICE_PERMISSIONS = [
    (
        "VIEW_INVOICES",
        "View Invoices",
        "View generated invoices",
        PermissionCategory.INVOICES,
    ),
    (
        "GENERATE_INVOICE",
        "Generate Invoice",
        "Bill a completed job card",
        PermissionCategory.INVOICES,
    ),
]


# -- USERS --

USER_PERMISSIONS = [
    (
        "MANAGE_USERS",
        "Manage Users",
        "List, add and edit users and their roles",
        PermissionCategory.USERS,
    ),
]


# -- AUDIT --

AUDIT_PERMISSIONS = [
    (
        "VIEW_AUDIT_LOG",
        "View Activity Log",
        "View recent activity (trailing window)",
        PermissionCategory.AUDIT,
    ),
    (
        "VIEW_FULL_AUDIT_LOG",
        "View Full Activity History",
        "View activity older than the trailing window",
        PermissionCategory.AUDIT,
    ),
]


PERMISSION_DEFINITIONS = (
    DASHBOARD_PERMISSIONS
    + INVENTORY_PERMISSIONS
    + JOB_CARD_PERMISSIONS
    + INVOICE_PERMISSIONS
    + USER_PERMISSIONS
    + AUDIT_PERMISSIONS
)
