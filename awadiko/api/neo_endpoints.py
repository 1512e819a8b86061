"""
Neo curation and jury rating endpoints
"""
from typing import List, Optional, Union
from fastapi import APIRouter, Depends, Query, Request
from pydantic import BaseModel
from sqlalchemy.orm import Session

from awadiko.core.cache_client import CacheClient
from awadiko.core.db import get_db
from awadiko.core.dependencies import get_optional_user, get_cache
from awadiko.models.user import User
from awadiko.schemas.base import ActionResult
from awadiko.services.neo_curation_service import NeoCurationService

router = APIRouter(prefix="/neos", tags=["neos"])


class RatingBody(BaseModel):
    value: int
    reason: Optional[Union[str, List[str]]] = None


def get_service(
    db: Session = Depends(get_db),
    user: Optional[User] = Depends(get_optional_user),
    cache: Optional[CacheClient] = Depends(get_cache),
) -> NeoCurationService:
    return NeoCurationService(db, user, cache)


@router.post("/curate", response_model=ActionResult)
async def curate_neo(request: Request, service: NeoCurationService = Depends(get_service)):
    """
    Suggest Neos for a term

    Form fields: `term_id` plus `suggestions[i].type` / `suggestions[i].text`
    """
    form = await request.form()
    return service.curate_neo(form)


@router.post("/{neo_id}/rate", response_model=ActionResult)
def rate_neo(neo_id: int, body: RatingBody, service: NeoCurationService = Depends(get_service)):
    return service.rate_neo(neo_id, body.value, body.reason)


@router.get("/terms", response_model=ActionResult)
def list_terms_with_neos(
    language_id: int = Query(..., gt=0),
    service: NeoCurationService = Depends(get_service),
):
    """Terms with Neos still open to the caller (all Neos when anonymous)"""
    return service.get_terms(language_id, service.user_id)


@router.get("/terms/{term_id}", response_model=ActionResult)
def list_term_neos(
    term_id: int,
    get_rated: bool = Query(False),
    service: NeoCurationService = Depends(get_service),
):
    return service.get_term_neos(term_id, get_rated=get_rated)


@router.get("/ratings/me", response_model=ActionResult)
def list_my_ratings(
    neo_ids: Optional[List[int]] = Query(None),
    service: NeoCurationService = Depends(get_service),
):
    return service.get_neos_rated_by_me(neo_ids=neo_ids)
