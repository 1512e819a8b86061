"""
Neo suggestion and rating schemas
"""
from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from typing import Optional

from awadiko.models.neo import NeoType


class NeoSuggestion(BaseModel):
    """One suggested neologism row"""
    type: NeoType
    text: str = Field(..., min_length=1, max_length=100)

    @field_validator("text", mode="before")
    @classmethod
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v


class NeoRatingInput(BaseModel):
    value: int = Field(..., ge=0, le=5)
    reason: Optional[str] = None

    @field_validator("reason", mode="before")
    @classmethod
    def join_reasons(cls, v):
        """Several rejection reasons are stored as one comma-separated string"""
        if v is None:
            return None
        if isinstance(v, (list, tuple)):
            v = ", ".join(str(r).strip() for r in v if r and str(r).strip())
        return str(v).strip() or None


class NeoRead(BaseModel):
    id: int
    term_id: int
    user_id: int
    text: str
    type: NeoType
    audio_url: Optional[str] = None
    rating_count: int = 0
    rating_score: float = 0.0
    reject_count: int = 0
    my_rating: Optional[int] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class MyRating(BaseModel):
    neo_id: int
    value: int

    class Config:
        from_attributes = True
