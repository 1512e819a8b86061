"""
Admin Domain endpoints
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
from awadiko.services.domain_admin_service import DomainAdminService

router = APIRouter(prefix="/admin/domains", tags=["admin"])


def get_service(
    db: Session = Depends(get_db),
    user: Optional[User] = Depends(get_optional_user),
    cache: Optional[CacheClient] = Depends(get_cache),
) -> DomainAdminService:
    return DomainAdminService(db, user, cache)


@router.get("", response_model=ActionResult)
def list_domains(
    skip: int = Query(0, ge=0),
    take: int = Query(settings.dictionary.admin_page_size, ge=1, le=500),
    search: str = Query(""),
    service: DomainAdminService = Depends(get_service),
):
    return service.get_domains(skip=skip, take=take, search=search)


@router.post("", response_model=ActionResult)
async def create_domain(request: Request, service: DomainAdminService = Depends(get_service)):
    form = await request.form()
    return service.create_domain(form)


@router.put("/{domain_id}", response_model=ActionResult)
async def update_domain(domain_id: int, request: Request, service: DomainAdminService = Depends(get_service)):
    form = await request.form()
    return service.update_domain(domain_id, form)


@router.delete("/{domain_id}", response_model=ActionResult)
def delete_domain(domain_id: int, service: DomainAdminService = Depends(get_service)):
    return service.delete_domain(domain_id)
