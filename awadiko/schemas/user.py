from pydantic import BaseModel, EmailStr, Field
from typing import List, Optional

from awadiko.core.permissions import Role


class UserCreate(BaseModel):
    email: EmailStr
    password: str = Field(min_length=8)
    name: Optional[str] = Field(default=None, max_length=255)


class UserRead(BaseModel):
    id: int
    email: EmailStr
    name: Optional[str] = None
    role: Role

    class Config:
        from_attributes = True


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class Token(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class TokenRefresh(BaseModel):
    refresh_token: str


class LanguageRead(BaseModel):
    id: int
    code: str
    name: str

    class Config:
        from_attributes = True


class UserProfileRead(BaseModel):
    id: int
    user_id: int
    ui_language: Optional[LanguageRead] = None
    target_languages: List[LanguageRead] = Field(default_factory=list)
