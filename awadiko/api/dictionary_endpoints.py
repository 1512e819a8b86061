"""
Public dictionary endpoints and translation request submission
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from awadiko.config.settings import settings
from awadiko.core.cache_client import CacheClient
from awadiko.core.db import get_db
from awadiko.core.dependencies import get_optional_user, get_current_user, get_cache
from awadiko.core.exceptions import NotFoundError
from awadiko.models.user import User
from awadiko.schemas.base import ActionResult, Envelope
from awadiko.services.dictionary_service import DictionaryService

router = APIRouter(prefix="/dictionary", tags=["dictionary"])


def get_service(
    db: Session = Depends(get_db),
    user: Optional[User] = Depends(get_optional_user),
    cache: Optional[CacheClient] = Depends(get_cache),
) -> DictionaryService:
    return DictionaryService(db, user, cache)


@router.get("/terms", response_model=ActionResult)
def list_dictionary_terms(
    language_id: int = Query(..., gt=0),
    community_language_id: int = Query(..., gt=0),
    skip: int = Query(0, ge=0),
    take: int = Query(settings.dictionary.dictionary_page_size, ge=1, le=200),
    search: str = Query(""),
    alphabet: str = Query("", max_length=1),
    service: DictionaryService = Depends(get_service),
):
    """
    Page through a language's terms alphabetically

    - **community_language_id**: Language the `translation` field is resolved in
    - **alphabet**: Optional starting letter
    """
    return service.get_dictionary_terms(
        language_id, community_language_id, skip=skip, take=take, search_query=search, alphabet=alphabet
    )


@router.get("/alphabets", response_model=ActionResult)
def list_alphabets(language_id: int = Query(..., gt=0), service: DictionaryService = Depends(get_service)):
    return service.get_available_alphabets(language_id)


@router.post("/requests", response_model=ActionResult)
async def submit_request(request: Request, service: DictionaryService = Depends(get_service)):
    form = await request.form()
    return service.submit_request(form)


@router.get("/profile", response_model=Envelope)
def get_request_profile(
    current_user: User = Depends(get_current_user),
    service: DictionaryService = Depends(get_service),
):
    """Languages the current user can submit requests for"""
    profile = service.get_user_profile_for_request(current_user.id)
    if profile is None:
        raise NotFoundError("Profile", current_user.id)
    return Envelope(status="ok", data=profile)
