# ============================================
# CENTRALIZED ROLE → PERMISSIONS MAP
# ============================================
WILDCARD = "*"

ROLE_PERMISSIONS = {

    # =====================================================
    # SUPER ADMIN — Full access to everything
    # =====================================================
    "superadmin": [WILDCARD],


    # =====================================================
    # COACH — manages athletes, results and approvals
    # =====================================================
    "coach": [
        "athletes.create", "athletes.view", "athletes.edit",
        "athletes.avatar.upload", "athletes.avatar.view",
        "results.create", "results.view", "results.edit", "results.delete",
        "events.view",
        "messages.create", "messages.view",
        "access_requests.view", "access_requests.edit",
        "approval_requests.view", "approval_requests.approve",
        "dashboard.view.coach",
    ],


    # =====================================================
    # PARENT — follows linked athletes
    # =====================================================
    "parent": [
        "athletes.view",
        "athletes.avatar.view",
        "results.view",
        "events.view",
        "messages.create", "messages.view",
        "access_requests.create", "access_requests.view",
        "dashboard.view.parent",
    ],


    # =====================================================
    # ATHLETE — own results only
    # =====================================================
    "athlete": [
        "athletes.view.own",
        "athletes.avatar.view",
        "results.view.own",
        "events.view",
        "messages.create", "messages.view",
        "dashboard.view.athlete",
    ],
}


# ============================================
# PERMISSION CATALOG (admin picker list)
# ============================================
PERMISSION_CATALOG = {
    "athletes.create": "Create athletes",
    "athletes.view": "View athletes",
    "athletes.edit": "Edit athletes",
    "athletes.delete": "Delete athletes",
    "athletes.avatar.view": "View athlete avatars",
    "athletes.avatar.upload": "Upload athlete avatars",

    "results.create": "Create results",
    "results.view": "View results",
    "results.edit": "Edit results",
    "results.delete": "Delete results",

    "events.create": "Create probes",
    "events.view": "View probes",
    "events.edit": "Edit probes",
    "events.delete": "Delete probes",

    "coaches.create": "Create coaches",
    "coaches.view": "View coaches",
    "coaches.edit": "Edit coaches",
    "coaches.delete": "Delete coaches",

    "users.create": "Create users",
    "users.view": "View users",
    "users.edit": "Edit users",
    "users.delete": "Delete users",

    "permissions.create": "Create permissions",
    "permissions.view": "View permissions",
    "permissions.edit": "Edit permissions",
    "permissions.delete": "Delete permissions",

    "roles.create": "Create roles",
    "roles.view": "View roles",
    "roles.edit": "Edit roles",
    "roles.delete": "Delete roles",

    "messages.create": "Send messages",
    "messages.view": "View messages",
    "messages.edit": "Edit messages",
    "messages.delete": "Delete messages",

    "access_requests.create": "Create access requests",
    "access_requests.view": "View access requests",
    "access_requests.edit": "Approve access requests",
    "access_requests.delete": "Delete access requests",

    "approval_requests.view": "View approval requests",
    "approval_requests.view.own": "View approval requests (own)",
    "approval_requests.approve": "Approve or reject accounts",
    "approval_requests.approve.own": "Approve or reject accounts (own)",

    "age_categories.view": "View age categories",
    "age_categories.manage": "Manage age categories",

    "social_links.view": "View social links",
    "social_links.manage": "Manage social links",
}
