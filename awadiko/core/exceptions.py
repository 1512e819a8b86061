"""
Custom exceptions for the AwaDiko dictionary backend.

Service-layer actions convert these into failure envelopes; anything that
escapes to the HTTP layer is rendered by ``awadiko.core.error_handlers``.
"""

from typing import Optional, Dict, Any
from enum import Enum


class ErrorCode(str, Enum):
    """Standardized error codes for the application."""

    # Authentication / authorization
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    INVALID_TOKEN = "INVALID_TOKEN"

    # Business rules
    NOT_FOUND = "NOT_FOUND"
    DUPLICATE_ENTRY = "DUPLICATE_ENTRY"

    # Generic errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


class DictionaryException(Exception):
    """Base exception for the dictionary backend."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code


class UnauthorizedError(DictionaryException):
    """Raised when an action needs a session user and there is none."""

    def __init__(self, message: str = "Unauthorized: No user session"):
        super().__init__(
            message=message,
            error_code=ErrorCode.UNAUTHORIZED,
            status_code=401
        )


class ForbiddenError(DictionaryException):
    """Raised when the caller's role lacks a required permission."""

    def __init__(self, message: str, missing: Optional[list] = None):
        super().__init__(
            message=message,
            error_code=ErrorCode.FORBIDDEN,
            details={"missing_permissions": missing or []},
            status_code=403
        )


class NotFoundError(DictionaryException):
    """Raised when a referenced record does not exist."""

    def __init__(self, resource: str, resource_id: Any = None):
        super().__init__(
            message=f"{resource} not found",
            error_code=ErrorCode.NOT_FOUND,
            details={"resource": resource, "resource_id": resource_id},
            status_code=404
        )


class ConflictError(DictionaryException):
    """Raised when a write would duplicate an existing record or remove one still in use."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.DUPLICATE_ENTRY, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
            status_code=409
        )
