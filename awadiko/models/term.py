"""
Term model: canonical dictionary entry
"""
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, UniqueConstraint, func
from sqlalchemy.orm import relationship

from awadiko.core.db import Base


class Term(Base):
    __tablename__ = "terms"
    __table_args__ = (
        UniqueConstraint("text", "meaning", "language_id", name="uq_terms_text_meaning_language"),
    )

    id = Column(Integer, primary_key=True)
    text = Column(String(100), nullable=False, index=True)
    meaning = Column(Text, nullable=False)
    phonics = Column(String(255), nullable=True)
    language_id = Column(Integer, ForeignKey("languages.id"), nullable=False, index=True)
    part_of_speech_id = Column(Integer, ForeignKey("parts_of_speech.id"), nullable=False)
    concept_id = Column(Integer, ForeignKey("concepts.id"), nullable=False, index=True)
    vote_score = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    language = relationship("Language")
    part_of_speech = relationship("PartOfSpeech")
    concept = relationship("Concept", back_populates="terms")
    domains = relationship("DomainsOnTerms", back_populates="term", cascade="all, delete-orphan")
    neos = relationship("Neo", back_populates="term", cascade="all, delete-orphan")

    def __repr__(self) -> str:  # pragma: no cover
        return f"<Term id={self.id} text={self.text!r} language_id={self.language_id}>"
