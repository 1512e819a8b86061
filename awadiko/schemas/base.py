from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional, Generic, TypeVar, Union
from datetime import datetime, timezone
import uuid

T = TypeVar('T')

FieldErrors = Dict[str, List[str]]


class Envelope(BaseModel, Generic[T]):
    status: str
    data: Optional[T] = None
    error: Optional[str] = None


class ActionResult(BaseModel, Generic[T]):
    """Result of a dictionary action: either data or an error string / field error map."""
    success: bool
    data: Optional[T] = None
    error: Optional[Union[str, FieldErrors]] = None
    message: Optional[str] = None

    @classmethod
    def ok(cls, data: Any = None, message: Optional[str] = None) -> "ActionResult":
        return cls(success=True, data=data, message=message)

    @classmethod
    def fail(cls, error: Union[str, FieldErrors], message: Optional[str] = None, data: Any = None) -> "ActionResult":
        return cls(success=False, error=error, message=message, data=data)


class StandardErrorResponse(BaseModel):
    """Error body for exceptions that escape the action layer"""
    error_code: str
    message: str
    details: Optional[Dict[str, Any]] = None
    request_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
