"""
Domain schemas for admin requests/responses
"""
from pydantic import BaseModel, field_validator


class DomainInput(BaseModel):
    """Schema for creating or updating a domain"""
    name: str

    @field_validator("name", mode="before")
    @classmethod
    def name_length(cls, v):
        name = str(v).strip() if v is not None else ""
        if not name:
            raise ValueError("Domain name is required")
        if len(name) > 100:
            raise ValueError("Domain name must be at most 100 characters")
        return name


class DomainRef(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True


class DomainRead(DomainRef):
    term_count: int = 0
    request_count: int = 0
