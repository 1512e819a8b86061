"""Static role -> permission table."""
import enum
from typing import Dict, FrozenSet


class Role(str, enum.Enum):
    EXPLORER = "EXPLORER"
    CONTRIBUTOR = "CONTRIBUTOR"
    CURATOR = "CURATOR"
    JUROR = "JUROR"
    ADMIN = "ADMIN"


class Permission(str, enum.Enum):
    VIEW_DICTIONARY = "view:dictionary"
    CREATE_REQUESTS = "create:requests"
    CURATE_NEOS = "curate:neos"
    RATE_NEOS = "rate:neos"
    REVIEW_REQUESTS = "review:requests"
    MANAGE_DICTIONARY = "manage:dictionary"
    VIEW_ADMIN = "view:admin"
    MANAGE_USERS = "manage:users"


DEFAULT_ROLE = Role.EXPLORER

_EXPLORER = frozenset({Permission.VIEW_DICTIONARY})
_CONTRIBUTOR = _EXPLORER | {Permission.CREATE_REQUESTS}
_CURATOR = _CONTRIBUTOR | {Permission.CURATE_NEOS}
_JUROR = _CURATOR | {
    Permission.RATE_NEOS,
    Permission.REVIEW_REQUESTS,
    Permission.VIEW_ADMIN,
}

ROLE_PERMISSIONS: Dict[Role, FrozenSet[Permission]] = {
    Role.EXPLORER: _EXPLORER,
    Role.CONTRIBUTOR: _CONTRIBUTOR,
    Role.CURATOR: _CURATOR,
    Role.JUROR: _JUROR,
    Role.ADMIN: frozenset(Permission),
}


def has_permission(role: Role | str | None, permission: Permission | str) -> bool:
    try:
        resolved = Role(role) if role else DEFAULT_ROLE
        wanted = Permission(permission)
    except ValueError:
        return False
    return wanted in ROLE_PERMISSIONS[resolved]
