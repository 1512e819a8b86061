"""
Core building blocks for the dictionary backend: database, auth guards,
caching, errors and logging.
"""

from .cache_client import CacheClient, get_cache_client, close_cache_client
from .exceptions import (
    DictionaryException,
    ErrorCode,
    UnauthorizedError,
    ForbiddenError,
    NotFoundError,
    ConflictError,
)
from .permissions import Role, Permission, has_permission

__all__ = [
    "CacheClient",
    "get_cache_client",
    "close_cache_client",
    "DictionaryException",
    "ErrorCode",
    "UnauthorizedError",
    "ForbiddenError",
    "NotFoundError",
    "ConflictError",
    "Role",
    "Permission",
    "has_permission",
]
