from sqlalchemy import Column, Integer, String

from awadiko.core.db import Base


class Language(Base):
    __tablename__ = "languages"

    id = Column(Integer, primary_key=True)
    code = Column(String(8), unique=True, nullable=False, index=True)  # ISO 639-3, e.g. "eng"
    name = Column(String(100), nullable=False)

    def __repr__(self) -> str:  # pragma: no cover
        return f"<Language id={self.id} code={self.code}>"


class PartOfSpeech(Base):
    __tablename__ = "parts_of_speech"

    id = Column(Integer, primary_key=True)
    name = Column(String(50), unique=True, nullable=False)
