"""Audit trail side channel for admin and review actions."""
import logging
from typing import Any, Dict, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from awadiko.models.audit_log import AuditLog

logger = logging.getLogger(__name__)


def log_audit(
    session: Session,
    user_id: Optional[int],
    action: str,
    resource_id: Any = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> None:
    """Record an audit entry. Never raises; a failed write is only logged."""
    try:
        session.add(
            AuditLog(
                user_id=user_id,
                action=action,
                resource_id=str(resource_id) if resource_id is not None else None,
                details=metadata or {},
            )
        )
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.warning(
            "Failed to write audit log",
            extra={"action": action, "resource_id": resource_id, "error": str(e)},
        )
