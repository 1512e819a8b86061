"""Language lookup endpoints"""
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from awadiko.config.settings import settings
from awadiko.core.db import get_db
from awadiko.models.language import Language

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/language", tags=["language"])


@router.get("/english")
def get_english_language(db: Session = Depends(get_db)):
    """Return `{id, name}` of the English language row"""
    try:
        language = db.execute(
            select(Language).where(Language.code == settings.dictionary.english_language_code)
        ).scalar_one_or_none()
    except SQLAlchemyError as e:
        logger.error("Failed to look up English language", exc_info=e)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    if language is None:
        return JSONResponse(status_code=404, content={"error": "English language not found"})
    return {"id": language.id, "name": language.name}
