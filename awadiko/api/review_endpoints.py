"""
Translation request review endpoints
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
from sqlalchemy.orm import Session

from awadiko.config.settings import settings
from awadiko.core.auth import require_permission
from awadiko.core.cache_client import CacheClient
from awadiko.core.db import get_db
from awadiko.core.dependencies import get_optional_user, get_cache
from awadiko.core.permissions import Permission
from awadiko.models.user import User
from awadiko.schemas.base import ActionResult
from awadiko.schemas.translation_request import ReviewDecision
from awadiko.services.review_service import ReviewService

router = APIRouter(prefix="/review", tags=["review"])


class RequestEditBody(BaseModel):
    word: str
    meaning: Optional[str] = None
    part_of_speech_id: int


def get_service(
    db: Session = Depends(get_db),
    user: Optional[User] = Depends(get_optional_user),
    cache: Optional[CacheClient] = Depends(get_cache),
) -> ReviewService:
    return ReviewService(db, user, cache)


def require_admin_view(user: Optional[User] = Depends(get_optional_user)) -> User:
    return require_permission(user, Permission.VIEW_ADMIN)


@router.get("/requests/pending", response_model=ActionResult, dependencies=[Depends(require_admin_view)])
def list_pending_requests(
    limit: int = Query(settings.dictionary.requests_page_size, ge=1, le=200),
    offset: int = Query(0, ge=0),
    service: ReviewService = Depends(get_service),
):
    return service.get_pending_requests(limit=limit, offset=offset)


@router.get("/requests/pending/count", response_model=ActionResult, dependencies=[Depends(require_admin_view)])
def count_pending_requests(service: ReviewService = Depends(get_service)):
    return service.get_pending_reviews_count()


@router.get("/requests", response_model=ActionResult, dependencies=[Depends(require_admin_view)])
def list_requests(
    limit: int = Query(settings.dictionary.requests_page_size, ge=1, le=200),
    offset: int = Query(0, ge=0),
    search: Optional[str] = Query(None),
    service: ReviewService = Depends(get_service),
):
    """
    List every request newest first

    - **search**: Matches word, meaning, requester name or rejection reason
    """
    return service.get_all_requests(limit=limit, offset=offset, search=search)


@router.post("/requests/{request_id}/decision", response_model=ActionResult)
def review_request(request_id: int, decision: ReviewDecision, service: ReviewService = Depends(get_service)):
    """Approve (promote into a Term) or reject a pending request"""
    return service.review_request(request_id, decision.status, decision.reason)


@router.put("/requests/{request_id}", response_model=ActionResult)
def update_request(request_id: int, body: RequestEditBody, service: ReviewService = Depends(get_service)):
    return service.update_request(request_id, body.model_dump())


@router.delete("/requests/{request_id}", response_model=ActionResult)
def delete_request(request_id: int, service: ReviewService = Depends(get_service)):
    return service.delete_request(request_id)
