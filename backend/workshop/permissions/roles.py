# Overview: Role -> capability matrix.
# Roles are totally ordered by privilege: owner > admin > worker.
# Each role holds everything the role below it holds.

WORKER_PERMISSIONS = frozenset({
    "VIEW_DASHBOARD",
    "VIEW_INVENTORY",
    "VIEW_JOB_CARDS",
    "CREATE_JOB_CARD",
})

ADMIN_PERMISSIONS = WORKER_PERMISSIONS | {
    "MANAGE_PRODUCTS",
    "CHANGE_JOB_STATUS",
    "VIEW_INVOICES",
    "GENERATE_INVOICE",
    "VIEW_AUDIT_LOG",
}

OWNER_PERMISSIONS = ADMIN_PERMISSIONS | {
    "DELETE_PRODUCTS",
    "MANAGE_USERS",
    "VIEW_FULL_AUDIT_LOG",
}

DEFAULT_ROLE_PERMISSIONS = {
    "owner": OWNER_PERMISSIONS,
    "admin": ADMIN_PERMISSIONS,
    "worker": WORKER_PERMISSIONS,
}
