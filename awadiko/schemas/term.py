"""
Term schemas for admin requests/responses and bulk import rows
"""
from pydantic import BaseModel, Field, field_validator
from typing import List, Optional


def _to_int(v) -> int:
    try:
        return int(v)
    except (TypeError, ValueError):
        return 0


class TermInput(BaseModel):
    """Schema for creating or updating a term"""
    text: str
    meaning: str
    concept_id: Optional[int] = None
    phonics: Optional[str] = None
    language_id: int
    part_of_speech_id: int
    domains: List[str] = Field(default_factory=list)

    @field_validator("text", mode="before")
    @classmethod
    def text_length(cls, v):
        text = str(v).strip() if v is not None else ""
        if not text:
            raise ValueError("Word text is required")
        if len(text) > 100:
            raise ValueError("Word text must be at most 100 characters")
        return text

    @field_validator("meaning", mode="before")
    @classmethod
    def meaning_required(cls, v):
        if v is None or not str(v).strip():
            raise ValueError("Meaning is required")
        return str(v).strip()

    @field_validator("concept_id", mode="before")
    @classmethod
    def blank_concept(cls, v):
        return _to_int(v) or None

    @field_validator("phonics", mode="before")
    @classmethod
    def blank_phonics(cls, v):
        if v is None:
            return None
        return str(v).strip() or None

    @field_validator("language_id", mode="before")
    @classmethod
    def language_required(cls, v):
        value = _to_int(v)
        if value <= 0:
            raise ValueError("Language is required")
        return value

    @field_validator("part_of_speech_id", mode="before")
    @classmethod
    def part_of_speech_required(cls, v):
        value = _to_int(v)
        if value <= 0:
            raise ValueError("Part of Speech is required")
        return value


class BulkTermRow(BaseModel):
    """One parsed row of a bulk upload; part of speech is given by name"""
    text: str
    meaning: str
    part_of_speech: str
    phonics: Optional[str] = None
    domains: List[str] = Field(default_factory=list)
    language_id: int

