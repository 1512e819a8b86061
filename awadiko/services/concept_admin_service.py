"""
Concept Admin Service - CRUD over language-agnostic meaning anchors
"""
import logging
from typing import Any, Mapping

from pydantic import ValidationError
from sqlalchemy import select, func
from sqlalchemy.exc import SQLAlchemyError

from awadiko.core.audit import log_audit
from awadiko.core.auth import authorized
from awadiko.core.forms import field_errors, form_value
from awadiko.core.permissions import Permission
from awadiko.models.concept import Concept
from awadiko.models.term import Term
from awadiko.schemas.base import ActionResult
from awadiko.schemas.concept import ConceptInput, ConceptRead
from awadiko.services.base import ActionService, LIKE_ESCAPE, like_pattern

logger = logging.getLogger(__name__)

CONCEPTS_PATH = "/admin/dictionary-concepts"


class ConceptAdminService(ActionService):
    """Admin management of Concepts"""

    def _term_count(self, concept_id: int) -> int:
        return self.db.execute(
            select(func.count(Term.id)).where(Term.concept_id == concept_id)
        ).scalar_one()

    def _gloss_taken(self, gloss: str, exclude_id: int | None = None) -> bool:
        stmt = select(Concept.id).where(func.lower(Concept.gloss) == gloss.lower())
        if exclude_id is not None:
            stmt = stmt.where(Concept.id != exclude_id)
        return self.db.execute(stmt.limit(1)).first() is not None

    @authorized(Permission.MANAGE_DICTIONARY)
    def get_concepts(self, skip: int = 0, take: int = 50, search: str = "") -> ActionResult:
        """
        List concepts newest first with the number of terms attached.

        Args:
            skip: Offset into the result set
            take: Page size
            search: Case-insensitive substring of the gloss

        Returns:
            ActionResult with ``{"items": [...], "total": n}``
        """
        try:
            term_count = (
                select(func.count(Term.id))
                .where(Term.concept_id == Concept.id)
                .correlate(Concept)
                .scalar_subquery()
            )
            stmt = select(Concept, term_count.label("term_count"))
            count_stmt = select(func.count(Concept.id))
            if search:
                condition = Concept.gloss.ilike(like_pattern(search), escape=LIKE_ESCAPE)
                stmt = stmt.where(condition)
                count_stmt = count_stmt.where(condition)

            rows = self.db.execute(
                stmt.order_by(Concept.created_at.desc(), Concept.id.desc()).offset(skip).limit(take)
            ).all()
            total = self.db.execute(count_stmt).scalar_one()

            items = [
                ConceptRead(
                    id=concept.id, gloss=concept.gloss, created_at=concept.created_at, term_count=count
                ).model_dump()
                for concept, count in rows
            ]
            return ActionResult.ok({"items": items, "total": total})
        except SQLAlchemyError as e:
            return self.database_failure("Failed to fetch concepts", e)

    @authorized(Permission.MANAGE_DICTIONARY)
    def create_concept(self, form: Mapping[str, Any]) -> ActionResult:
        try:
            data = ConceptInput(gloss=form_value(form, "gloss"))
        except ValidationError as e:
            return ActionResult.fail(field_errors(e))

        try:
            if self._gloss_taken(data.gloss):
                return ActionResult.fail({"gloss": ["A concept with this gloss already exists."]})

            concept = Concept(gloss=data.gloss)
            self.db.add(concept)
            self.db.commit()
        except SQLAlchemyError as e:
            return self.database_failure("Database error while creating concept", e)

        log_audit(self.db, self.user_id, "admin:concept:created", concept.id, {"gloss": concept.gloss})
        self.revalidate(CONCEPTS_PATH)
        return ActionResult.ok(ConceptRead(id=concept.id, gloss=concept.gloss, created_at=concept.created_at).model_dump())

    @authorized(Permission.MANAGE_DICTIONARY)
    def update_concept(self, concept_id: int, form: Mapping[str, Any]) -> ActionResult:
        try:
            data = ConceptInput(gloss=form_value(form, "gloss"))
        except ValidationError as e:
            return ActionResult.fail(field_errors(e))

        try:
            concept = self.db.get(Concept, concept_id)
            if concept is None:
                return ActionResult.fail("Concept not found")
            if self._gloss_taken(data.gloss, exclude_id=concept_id):
                return ActionResult.fail({"gloss": ["Another concept with this gloss already exists."]})

            concept.gloss = data.gloss
            self.db.commit()
        except SQLAlchemyError as e:
            return self.database_failure("Database error while updating concept", e, concept_id=concept_id)

        log_audit(self.db, self.user_id, "admin:concept:updated", concept_id, {"gloss": data.gloss})
        self.revalidate(CONCEPTS_PATH)
        return ActionResult.ok(
            ConceptRead(
                id=concept.id, gloss=concept.gloss, created_at=concept.created_at,
                term_count=self._term_count(concept.id),
            ).model_dump()
        )

    @authorized(Permission.MANAGE_DICTIONARY)
    def delete_concept(self, concept_id: int) -> ActionResult:
        try:
            concept = self.db.get(Concept, concept_id)
            if concept is None:
                return ActionResult.fail("Concept not found")

            attached = self._term_count(concept_id)
            if attached > 0:
                return ActionResult.fail(
                    f"Cannot delete concept because it has {attached} term(s) attached. "
                    "Please delete or reassign those terms first."
                )

            self.db.delete(concept)
            self.db.commit()
        except SQLAlchemyError as e:
            return self.database_failure("Failed to delete concept", e, concept_id=concept_id)

        log_audit(self.db, self.user_id, "admin:concept:deleted", concept_id)
        self.revalidate(CONCEPTS_PATH)
        return ActionResult.ok()
