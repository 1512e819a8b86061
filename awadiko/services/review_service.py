"""
Review Service - translation request moderation and promotion into Terms
"""
import logging
from typing import Any, Mapping, Optional

from pydantic import ValidationError
from sqlalchemy import select, func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload

from awadiko.core.audit import log_audit
from awadiko.core.auth import authorized
from awadiko.core.forms import field_errors
from awadiko.core.permissions import Permission
from awadiko.models.domain import DomainsOnRequests, DomainsOnTerms
from awadiko.models.term import Term
from awadiko.models.translation_request import TranslationRequest, RequestStatus
from awadiko.models.user import User
from awadiko.schemas.base import ActionResult
from awadiko.schemas.translation_request import RequestEdit, RequestRead
from awadiko.services.base import ActionService, LIKE_ESCAPE, like_pattern
from awadiko.services.term_resolution import create_concept

logger = logging.getLogger(__name__)

REVIEW_PATHS = ("/admin/requests", "/curator/requests", "/home", "/dictionary")
EDIT_PATHS = ("/admin/requests", "/curator/requests")


def _serialize_request(request: TranslationRequest) -> dict:
    return RequestRead(
        id=request.id,
        word=request.word,
        meaning=request.meaning,
        source_language_id=request.source_language_id,
        target_language_id=request.target_language_id,
        part_of_speech_id=request.part_of_speech_id,
        user_id=request.user_id,
        user_name=request.user.name if request.user else None,
        status=request.status,
        rejection_reason=request.rejection_reason,
        reviewed_by_id=request.reviewed_by_id,
        domains=[link.domain.name for link in request.domains],
        created_at=request.created_at,
    ).model_dump()


class ReviewService(ActionService):
    """Lists, edits and decides translation requests"""

    def _listing(self):
        return select(TranslationRequest).options(
            selectinload(TranslationRequest.user),
            selectinload(TranslationRequest.domains).selectinload(DomainsOnRequests.domain),
        )

    def get_pending_requests(self, limit: int = 10, offset: int = 0) -> ActionResult:
        try:
            requests = self.db.execute(
                self._listing()
                .where(TranslationRequest.status == RequestStatus.PENDING)
                .order_by(TranslationRequest.created_at.desc(), TranslationRequest.id.desc())
                .offset(offset)
                .limit(limit)
            ).scalars().all()
            return ActionResult.ok([_serialize_request(r) for r in requests])
        except SQLAlchemyError as e:
            return self.database_failure("Failed to fetch requests", e)

    def get_all_requests(self, limit: int = 10, offset: int = 0, search: Optional[str] = None) -> ActionResult:
        """Every request newest first; ``search`` matches word, meaning, requester name or rejection reason."""
        try:
            stmt = self._listing()
            if search:
                pattern = like_pattern(search)
                stmt = stmt.outerjoin(User, TranslationRequest.user_id == User.id).where(
                    or_(
                        TranslationRequest.word.ilike(pattern, escape=LIKE_ESCAPE),
                        TranslationRequest.meaning.ilike(pattern, escape=LIKE_ESCAPE),
                        User.name.ilike(pattern, escape=LIKE_ESCAPE),
                        TranslationRequest.rejection_reason.ilike(pattern, escape=LIKE_ESCAPE),
                    )
                )
            requests = self.db.execute(
                stmt.order_by(TranslationRequest.created_at.desc(), TranslationRequest.id.desc())
                .offset(offset)
                .limit(limit)
            ).scalars().all()
            return ActionResult.ok([_serialize_request(r) for r in requests])
        except SQLAlchemyError as e:
            return self.database_failure("Failed to fetch requests", e)

    def get_pending_reviews_count(self) -> ActionResult:
        try:
            count = self.db.execute(
                select(func.count(TranslationRequest.id)).where(TranslationRequest.status == RequestStatus.PENDING)
            ).scalar_one()
            return ActionResult.ok({"count": count})
        except SQLAlchemyError as e:
            failure = self.database_failure("Failed to fetch pending reviews count", e)
            failure.data = {"count": 0}
            return failure

    @authorized(Permission.REVIEW_REQUESTS)
    def review_request(self, request_id: int, status: RequestStatus | str, reason: Optional[str] = None) -> ActionResult:
        """
        Approve or reject a pending request.

        Approval promotes the request into a new Concept and Term in one
        transaction. Only PENDING requests can be decided.

        Args:
            request_id: Translation request ID
            status: APPROVED or REJECTED
            reason: Rejection reason (ignored on approval)
        """
        try:
            decision = RequestStatus(status)
        except ValueError:
            return ActionResult.fail("Failed to update request status")
        if decision == RequestStatus.PENDING:
            return ActionResult.fail("Failed to update request status")

        try:
            request = self.db.execute(
                select(TranslationRequest)
                .where(TranslationRequest.id == request_id)
                .options(selectinload(TranslationRequest.domains))
                .with_for_update()
            ).scalar_one_or_none()
            if request is None:
                return ActionResult.fail("Request not found")
            if request.status != RequestStatus.PENDING:
                return ActionResult.fail(f"Request has already been {request.status.value.lower()}")

            if decision == RequestStatus.APPROVED:
                concept = create_concept(self.db, request.meaning or request.word)
                term = Term(
                    text=request.word,
                    language_id=request.source_language_id,
                    meaning=request.meaning or request.word,
                    part_of_speech_id=request.part_of_speech_id,
                    concept_id=concept.id,
                )
                for link in request.domains:
                    term.domains.append(DomainsOnTerms(domain_id=link.domain_id))
                self.db.add(term)
            else:
                request.rejection_reason = reason

            request.status = decision
            request.reviewed_by_id = self.user_id
            self.db.commit()
        except SQLAlchemyError as e:
            return self.database_failure("Failed to update request status", e, translation_request_id=request_id)

        if decision == RequestStatus.APPROVED:
            log_audit(self.db, self.user_id, "review:request:approved", request_id, {})
        else:
            log_audit(self.db, self.user_id, "review:request:rejected", request_id, {"reason": reason})
        self.revalidate(*REVIEW_PATHS)
        return ActionResult.ok()

    @authorized(Permission.REVIEW_REQUESTS)
    def update_request(self, request_id: int, data: Mapping[str, Any]) -> ActionResult:
        try:
            edit = RequestEdit(
                word=data.get("word"),
                meaning=data.get("meaning"),
                part_of_speech_id=data.get("part_of_speech_id"),
            )
        except ValidationError as e:
            return ActionResult.fail(field_errors(e))

        try:
            request = self.db.get(TranslationRequest, request_id)
            if request is None:
                return ActionResult.fail("Failed to update request")
            request.word = edit.word
            request.meaning = edit.meaning
            request.part_of_speech_id = edit.part_of_speech_id
            self.db.commit()
        except SQLAlchemyError as e:
            return self.database_failure("Failed to update request", e, translation_request_id=request_id)

        log_audit(
            self.db, self.user_id, "review:request:edited", request_id,
            {"word": edit.word, "part_of_speech_id": edit.part_of_speech_id},
        )
        self.revalidate(*EDIT_PATHS)
        return ActionResult.ok()

    @authorized(Permission.REVIEW_REQUESTS)
    def delete_request(self, request_id: int) -> ActionResult:
        try:
            request = self.db.get(TranslationRequest, request_id)
            if request is None:
                return ActionResult.fail("Failed to delete request")
            self.db.delete(request)
            self.db.commit()
        except SQLAlchemyError as e:
            return self.database_failure("Failed to delete request", e, translation_request_id=request_id)

        log_audit(self.db, self.user_id, "review:request:deleted", request_id, {})
        self.revalidate(*EDIT_PATHS)
        return ActionResult.ok()
