"""
Shared plumbing for dictionary action services.
"""
import logging
from typing import Any, Optional

from sqlalchemy.orm import Session

from awadiko.core.cache_client import CacheClient
from awadiko.schemas.base import ActionResult

logger = logging.getLogger(__name__)


LIKE_ESCAPE = "\\"


def like_pattern(value: str, leading: bool = True) -> str:
    """``ilike`` pattern matching ``value`` literally; pair with ``escape=LIKE_ESCAPE``."""
    escaped = value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"{'%' if leading else ''}{escaped}%"


def page_cache_key(path: str, *parts: Any) -> str:
    """Cache key for a read served under ``path``."""
    return ":".join(["page", path, *(str(p) for p in parts)])


class ActionService:
    """Base for services whose public methods return ``ActionResult`` envelopes."""

    def __init__(self, db: Session, user: Any = None, cache_client: Optional[CacheClient] = None):
        self.db = db
        self.user = user
        self.cache = cache_client

    @property
    def user_id(self) -> Optional[int]:
        return getattr(self.user, "id", None)

    def revalidate(self, *paths: str) -> None:
        """Drop cached reads for each path."""
        if not self.cache:
            return
        for path in paths:
            self.cache.delete_prefix(page_cache_key(path, ""))

    def database_failure(self, message: str, exc: Exception, **extra: Any) -> ActionResult:
        """Roll back, log and wrap a database error."""
        self.db.rollback()
        logger.error(message, exc_info=exc, extra={"user_id": self.user_id, **extra})
        return ActionResult.fail(message)
