"""
Authorization guards.

Guards raise ``UnauthorizedError`` / ``ForbiddenError``; the ``authorized``
decorator turns those into failure envelopes for action methods.
"""
import functools
import logging
from typing import Any, Callable, Iterable, Optional, Tuple

from awadiko.core.exceptions import ForbiddenError, UnauthorizedError
from awadiko.core.permissions import DEFAULT_ROLE, Permission, Role, has_permission
from awadiko.schemas.base import ActionResult

logger = logging.getLogger(__name__)


def _value(permission: Permission | str) -> str:
    return permission.value if isinstance(permission, Permission) else str(permission)


def get_user_role(user: Any) -> Role:
    """Role of ``user``; users without a recognised role are explorers."""
    role = getattr(user, "role", None)
    if not role:
        return DEFAULT_ROLE
    try:
        return Role(role)
    except ValueError:
        return DEFAULT_ROLE


def require_auth(user: Any) -> Any:
    if user is None:
        raise UnauthorizedError()
    return user


def require_permission(user: Any, permission: Permission | str) -> Any:
    require_auth(user)
    if not has_permission(get_user_role(user), permission):
        raise ForbiddenError(
            f"Forbidden: Missing permission '{_value(permission)}'",
            missing=[_value(permission)],
        )
    return user


def require_any_permission(user: Any, permissions: Iterable[Permission | str]) -> Any:
    require_auth(user)
    wanted = [_value(p) for p in permissions]
    role = get_user_role(user)
    if not any(has_permission(role, p) for p in wanted):
        raise ForbiddenError(
            f"Forbidden: Missing any of required permissions: {', '.join(wanted)}",
            missing=wanted,
        )
    return user


def require_all_permissions(user: Any, permissions: Iterable[Permission | str]) -> Any:
    require_auth(user)
    role = get_user_role(user)
    missing = [_value(p) for p in permissions if not has_permission(role, p)]
    if missing:
        raise ForbiddenError(
            f"Forbidden: Missing required permissions: {', '.join(missing)}",
            missing=missing,
        )
    return user


def get_auth_context(user: Any) -> Tuple[Optional[Any], Optional[Role]]:
    if user is None:
        return None, None
    return user, get_user_role(user)


def authorized(permission: Optional[Permission | str] = None) -> Callable:
    """
    Guard an action method on a service holding ``self.user``.

    With no permission only a session user is required. Guard failures
    are returned as ``ActionResult(success=False, error=<message>)``.
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(self, *args, **kwargs):
            try:
                if permission is None:
                    require_auth(self.user)
                else:
                    require_permission(self.user, permission)
            except (UnauthorizedError, ForbiddenError) as e:
                logger.info(
                    "Action denied",
                    extra={"action": func.__qualname__, "reason": e.message},
                )
                return ActionResult.fail(e.message)
            return func(self, *args, **kwargs)
        return wrapper
    return decorator
