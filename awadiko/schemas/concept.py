"""
Concept schemas for admin requests/responses
"""
from pydantic import BaseModel, field_validator
from datetime import datetime
from typing import Optional


class ConceptInput(BaseModel):
    """Schema for creating or updating a concept"""
    gloss: str

    @field_validator("gloss", mode="before")
    @classmethod
    def gloss_required(cls, v):
        if v is None or not str(v).strip():
            raise ValueError("Gloss is required")
        return str(v).strip()


class ConceptRead(BaseModel):
    id: int
    gloss: str
    created_at: Optional[datetime] = None
    term_count: int = 0

    class Config:
        from_attributes = True
