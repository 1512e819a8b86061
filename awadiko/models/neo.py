"""
Neo (community neologism suggestion) and NeoRating models
"""
from sqlalchemy import (
    Column, Integer, String, Float, Text, DateTime, ForeignKey,
    UniqueConstraint, Enum as SQLEnum, func,
)
from sqlalchemy.orm import relationship
import enum

from awadiko.core.db import Base


class NeoType(str, enum.Enum):
    POPULAR = "POPULAR"
    ADOPTIVE = "ADOPTIVE"
    FUNCTIONAL = "FUNCTIONAL"
    ROOT = "ROOT"
    CREATIVE = "CREATIVE"


class Neo(Base):
    __tablename__ = "neos"

    id = Column(Integer, primary_key=True)
    term_id = Column(Integer, ForeignKey("terms.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    text = Column(String(100), nullable=False)
    type = Column(SQLEnum(NeoType), nullable=False)
    audio_url = Column(String(500), nullable=True)
    # Derived from neo_ratings; written back by the rating transaction
    rating_count = Column(Integer, nullable=False, default=0)
    rating_score = Column(Float, nullable=False, default=0.0)
    reject_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    term = relationship("Term", back_populates="neos")
    ratings = relationship("NeoRating", back_populates="neo", cascade="all, delete-orphan")


class NeoRating(Base):
    __tablename__ = "neo_ratings"
    __table_args__ = (
        UniqueConstraint("neo_id", "user_id", name="uq_neo_ratings_neo_user"),
    )

    id = Column(Integer, primary_key=True)
    neo_id = Column(Integer, ForeignKey("neos.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    value = Column(Integer, nullable=False)
    rejection_reason = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    neo = relationship("Neo", back_populates="ratings")
