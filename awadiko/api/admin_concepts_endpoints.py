"""
Admin Concept endpoints
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from awadiko.config.settings import settings
from awadiko.core.cache_client import CacheClient
from awadiko.core.db import get_db
from awadiko.core.dependencies import get_optional_user, get_cache
from awadiko.models.user import User
from awadiko.schemas.base import ActionResult
from awadiko.services.concept_admin_service import ConceptAdminService

router = APIRouter(prefix="/admin/concepts", tags=["admin"])


def get_service(
    db: Session = Depends(get_db),
    user: Optional[User] = Depends(get_optional_user),
    cache: Optional[CacheClient] = Depends(get_cache),
) -> ConceptAdminService:
    return ConceptAdminService(db, user, cache)


@router.get("", response_model=ActionResult)
def list_concepts(
    skip: int = Query(0, ge=0),
    take: int = Query(settings.dictionary.admin_page_size, ge=1, le=500),
    search: str = Query(""),
    service: ConceptAdminService = Depends(get_service),
):
    """
    List concepts newest first

    - **search**: Case-insensitive substring of the gloss
    """
    return service.get_concepts(skip=skip, take=take, search=search)


@router.post("", response_model=ActionResult)
async def create_concept(request: Request, service: ConceptAdminService = Depends(get_service)):
    form = await request.form()
    return service.create_concept(form)


@router.put("/{concept_id}", response_model=ActionResult)
async def update_concept(concept_id: int, request: Request, service: ConceptAdminService = Depends(get_service)):
    form = await request.form()
    return service.update_concept(concept_id, form)


@router.delete("/{concept_id}", response_model=ActionResult)
def delete_concept(concept_id: int, service: ConceptAdminService = Depends(get_service)):
    return service.delete_concept(concept_id)
