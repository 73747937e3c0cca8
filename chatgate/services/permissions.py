"""Role-based permissions: static role table and per-request checks."""

from chatgate.schemas.auth import SessionClaims

QUERY_ALL_DATA = "query_all_data"
QUERY_BASIC_DATA = "query_basic_data"
VIEW_SENSITIVE = "view_sensitive"
MANAGE_USERS = "manage_users"

# Permissions each role declares for itself.
ROLE_GRANTS: dict[str, frozenset[str]] = {
    "admin": frozenset({QUERY_ALL_DATA, VIEW_SENSITIVE, MANAGE_USERS}),
    "manager": frozenset({QUERY_ALL_DATA, VIEW_SENSITIVE}),
    "user": frozenset({QUERY_BASIC_DATA}),
}

# Each role also holds everything the role below it holds: admin > manager > user.
ROLE_PARENT: dict[str, str | None] = {
    "admin": "manager",
    "manager": "user",
    "user": None,
}


def _effective(role: str) -> frozenset[str]:
    granted: set[str] = set()
    current: str | None = role
    while current is not None:
        granted |= ROLE_GRANTS[current]
        current = ROLE_PARENT[current]
    return frozenset(granted)


ROLE_PERMISSIONS: dict[str, frozenset[str]] = {role: _effective(role) for role in ROLE_GRANTS}

# Literal, case-sensitive marker that makes a prompt require VIEW_SENSITIVE.
SENSITIVE_MARKER = "sensitive"


class PermissionDeniedError(Exception):
    """Raised when the caller's role lacks the permission an action requires."""

    def __init__(self, permission: str) -> None:
        self.permission = permission
        self.message = "You do not have permission to make this query"
        super().__init__(self.message)


def permissions_for(role: str) -> frozenset[str]:
    """Effective permission set for a role; empty for an unrecognized role."""
    return ROLE_PERMISSIONS.get(role, frozenset())


def has_permission(claims: SessionClaims, permission: str) -> bool:
    return permission in permissions_for(claims.role)


def required_permission_for_prompt(prompt: str) -> str:
    """Classify a query prompt: VIEW_SENSITIVE if it mentions 'sensitive', else QUERY_BASIC_DATA."""
    if SENSITIVE_MARKER in prompt:
        return VIEW_SENSITIVE
    return QUERY_BASIC_DATA
