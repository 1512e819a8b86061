"""
Translation request schemas
"""
from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from typing import List, Optional

from awadiko.models.translation_request import RequestStatus


def _positive_id(v, message: str) -> int:
    try:
        value = int(v)
    except (TypeError, ValueError):
        raise ValueError(message)
    if value <= 0:
        raise ValueError(message)
    return value


def _required_text(v, message: str, max_length: Optional[int] = None) -> str:
    text = str(v).strip() if v is not None else ""
    if not text:
        raise ValueError(message)
    if max_length and len(text) > max_length:
        raise ValueError(f"Must be at most {max_length} characters")
    return text


class TranslationRequestInput(BaseModel):
    """Schema for a user's translation request submission"""
    word: str
    meaning: str
    source_language_id: int
    target_language_id: int
    part_of_speech_id: int
    domains: List[str] = Field(default_factory=list)

    @field_validator("word", mode="before")
    @classmethod
    def word_required(cls, v):
        return _required_text(v, "Word is required", max_length=100)

    @field_validator("meaning", mode="before")
    @classmethod
    def meaning_required(cls, v):
        return _required_text(v, "Meaning is required")

    @field_validator("source_language_id", mode="before")
    @classmethod
    def source_language_required(cls, v):
        return _positive_id(v, "Source language is required")

    @field_validator("target_language_id", mode="before")
    @classmethod
    def target_language_required(cls, v):
        return _positive_id(v, "Target language is required")

    @field_validator("part_of_speech_id", mode="before")
    @classmethod
    def part_of_speech_required(cls, v):
        return _positive_id(v, "Part of speech is required")


class RequestEdit(BaseModel):
    """Reviewer correction of a pending request"""
    word: str
    meaning: str
    part_of_speech_id: int

    @field_validator("word", mode="before")
    @classmethod
    def word_required(cls, v):
        return _required_text(v, "Word is required", max_length=100)

    @field_validator("meaning", mode="before")
    @classmethod
    def meaning_required(cls, v):
        return _required_text(v, "Meaning is required")

    @field_validator("part_of_speech_id", mode="before")
    @classmethod
    def part_of_speech_required(cls, v):
        return _positive_id(v, "Part of speech is required")


class ReviewDecision(BaseModel):
    status: RequestStatus
    reason: Optional[str] = None


class RequestRead(BaseModel):
    id: int
    word: str
    meaning: str
    source_language_id: int
    target_language_id: int
    part_of_speech_id: int
    user_id: int
    user_name: Optional[str] = None
    status: RequestStatus
    rejection_reason: Optional[str] = None
    reviewed_by_id: Optional[int] = None
    domains: List[str] = Field(default_factory=list)
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
