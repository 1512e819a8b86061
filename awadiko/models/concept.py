"""
Concept model: language-agnostic meaning anchor shared by equivalent Terms
"""
from sqlalchemy import Column, Integer, Text, DateTime, func
from sqlalchemy.orm import relationship

from awadiko.core.db import Base


class Concept(Base):
    __tablename__ = "concepts"

    id = Column(Integer, primary_key=True)
    gloss = Column(Text, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    terms = relationship("Term", back_populates="concept")

    def __repr__(self) -> str:  # pragma: no cover
        return f"<Concept id={self.id} gloss={self.gloss!r}>"
