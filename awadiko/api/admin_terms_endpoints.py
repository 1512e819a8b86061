"""
Admin Term endpoints, including bulk CSV import
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, File, Form, Query, Request, UploadFile
from sqlalchemy.orm import Session

from awadiko.config.settings import settings
from awadiko.core.cache_client import CacheClient
from awadiko.core.db import get_db
from awadiko.core.dependencies import get_optional_user, get_cache
from awadiko.models.user import User
from awadiko.schemas.base import ActionResult
from awadiko.schemas.term import BulkTermRow
from awadiko.services.term_admin_service import TermAdminService, parse_terms_csv

router = APIRouter(prefix="/admin/terms", tags=["admin"])


def get_service(
    db: Session = Depends(get_db),
    user: Optional[User] = Depends(get_optional_user),
    cache: Optional[CacheClient] = Depends(get_cache),
) -> TermAdminService:
    return TermAdminService(db, user, cache)


@router.get("", response_model=ActionResult)
def list_terms(
    skip: int = Query(0, ge=0),
    take: int = Query(settings.dictionary.admin_page_size, ge=1, le=500),
    search: str = Query(""),
    language_id: Optional[int] = Query(None, gt=0),
    service: TermAdminService = Depends(get_service),
):
    """
    List terms newest first

    - **search**: Case-insensitive substring of text or meaning
    - **language_id**: Optional language filter
    """
    return service.get_terms(skip=skip, take=take, search=search, language_id=language_id)


@router.get("/count", response_model=ActionResult)
def count_terms(service: TermAdminService = Depends(get_service)):
    return service.get_total_term_count()


@router.post("", response_model=ActionResult)
async def create_term(request: Request, service: TermAdminService = Depends(get_service)):
    form = await request.form()
    return service.create_term(form)


@router.put("/{term_id}", response_model=ActionResult)
async def update_term(term_id: int, request: Request, service: TermAdminService = Depends(get_service)):
    form = await request.form()
    return service.update_term(term_id, form)


@router.delete("/{term_id}", response_model=ActionResult)
def delete_term(term_id: int, service: TermAdminService = Depends(get_service)):
    return service.delete_term(term_id)


@router.post("/bulk", response_model=ActionResult)
def bulk_add_terms(rows: List[BulkTermRow], service: TermAdminService = Depends(get_service)):
    """Insert already-parsed rows; each row succeeds or fails on its own"""
    return service.bulk_add_terms(rows)


@router.post("/upload", response_model=ActionResult)
async def upload_terms_csv(
    file: UploadFile = File(...),
    language_id: int = Form(..., gt=0),
    service: TermAdminService = Depends(get_service),
):
    """
    Import a CSV file of terms

    - **file**: CSV with header `text,meaning,partOfSpeech,phonics,domains`
      (domains separated by `;` or `|`)
    - **language_id**: Language every row is added to
    """
    raw = await file.read()
    try:
        content = raw.decode("utf-8")
    except UnicodeDecodeError:
        return ActionResult.fail("CSV file must be UTF-8 encoded")

    rows, parse_errors = parse_terms_csv(content, language_id)
    result = service.bulk_add_terms(rows)
    if result.success and parse_errors:
        data = dict(result.data or {})
        data["errors"] = parse_errors + data.get("errors", [])
        result = ActionResult.ok(data)
    return result
