"""
Role-Based Access Control.

Roles, permissions and the role → permission matrix. Endpoint guards
live in core/dependencies.py and consult this module.
"""

from enum import StrEnum


class Role(StrEnum):
    ADMIN = "admin"
    MANAGER = "manager"
    STAFF = "staff"
    SALES_AGENT = "sales_agent"
    CREATOR_MANAGER = "creator_manager"
    CREATOR = "creator"
    STAFF_CONTENT_CREATOR = "staff_content_creator"
    CLIENT = "client"
    PROSPECTIVE_CLIENT = "prospective_client"


class Permission(StrEnum):
    MANAGE_USERS = "can_manage_users"
    MANAGE_CLIENTS = "can_manage_clients"
    MANAGE_CAMPAIGNS = "can_manage_campaigns"
    MANAGE_LEADS = "can_manage_leads"
    MANAGE_CONTENT = "can_manage_content"
    MANAGE_INVOICES = "can_manage_invoices"
    MANAGE_TICKETS = "can_manage_tickets"
    VIEW_REPORTS = "can_view_reports"
    MANAGE_SETTINGS = "can_manage_settings"


ROLE_PERMISSIONS: dict[Role, frozenset[Permission]] = {
    Role.ADMIN: frozenset(Permission),
    Role.MANAGER: frozenset(Permission) - {Permission.MANAGE_USERS, Permission.MANAGE_SETTINGS},
    Role.STAFF: frozenset({
        Permission.MANAGE_CLIENTS,
        Permission.MANAGE_CAMPAIGNS,
        Permission.MANAGE_LEADS,
        Permission.MANAGE_CONTENT,
        Permission.MANAGE_TICKETS,
    }),
    Role.SALES_AGENT: frozenset({
        Permission.MANAGE_CLIENTS,
        Permission.MANAGE_LEADS,
        Permission.MANAGE_TICKETS,
    }),
    Role.CREATOR_MANAGER: frozenset({
        Permission.MANAGE_CLIENTS,
        Permission.MANAGE_CONTENT,
        Permission.VIEW_REPORTS,
    }),
    Role.CREATOR: frozenset({
        Permission.MANAGE_CONTENT,
        Permission.MANAGE_TICKETS,
    }),
    Role.STAFF_CONTENT_CREATOR: frozenset({
        Permission.MANAGE_CLIENTS,
        Permission.MANAGE_CONTENT,
    }),
    Role.CLIENT: frozenset({Permission.MANAGE_TICKETS}),
    Role.PROSPECTIVE_CLIENT: frozenset(),
}

# Everyone on the agency side, i.e. every role without a tenant binding.
STAFF_ROLES: frozenset[Role] = frozenset(Role) - {Role.CLIENT, Role.PROSPECTIVE_CLIENT}

# Roles that may create, edit and delete tasks.
TASK_EDITOR_ROLES: frozenset[Role] = frozenset({Role.ADMIN, Role.MANAGER, Role.STAFF})

# Roles a task can be assigned to.
ASSIGNABLE_ROLES: frozenset[Role] = frozenset({
    Role.ADMIN,
    Role.MANAGER,
    Role.STAFF,
    Role.CREATOR_MANAGER,
    Role.CREATOR,
    Role.STAFF_CONTENT_CREATOR,
})


def _as_role(role: str | Role) -> Role | None:
    try:
        return Role(role)
    except ValueError:
        return None


def has_permission(role: str | Role, permission: Permission) -> bool:
    """Check a role against the matrix. Unknown roles have no permissions."""
    resolved = _as_role(role)
    if resolved is None:
        return False
    return permission in ROLE_PERMISSIONS[resolved]


def permission_map(role: str | Role) -> dict[str, bool]:
    """Full permission map for a role, as exposed by /auth/me."""
    return {perm.value: has_permission(role, perm) for perm in Permission}


def is_staff(role: str | Role) -> bool:
    return _as_role(role) in STAFF_ROLES
