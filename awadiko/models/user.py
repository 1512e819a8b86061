from sqlalchemy.orm import relationship
from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, func, Enum as SQLEnum

from awadiko.core.db import Base
from awadiko.core.permissions import Role


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=True)
    hashed_password = Column(String(255), nullable=False)
    role = Column(SQLEnum(Role), default=Role.EXPLORER, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # Relationships
    profile = relationship("UserProfile", back_populates="user", uselist=False, cascade="all, delete-orphan")

    def __repr__(self) -> str:  # pragma: no cover
        return f"<User id={self.id} email={self.email} role={self.role}>"


class UserProfile(Base):
    __tablename__ = "user_profiles"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    ui_language_id = Column(Integer, ForeignKey("languages.id"), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    user = relationship("User", back_populates="profile")
    ui_language = relationship("Language")
    target_languages = relationship(
        "ProfileTargetLanguage", back_populates="profile", cascade="all, delete-orphan"
    )


class ProfileTargetLanguage(Base):
    __tablename__ = "profile_target_languages"

    profile_id = Column(Integer, ForeignKey("user_profiles.id", ondelete="CASCADE"), primary_key=True)
    language_id = Column(Integer, ForeignKey("languages.id"), primary_key=True)

    profile = relationship("UserProfile", back_populates="target_languages")
    language = relationship("Language")
