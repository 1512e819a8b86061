"""
Neo Curation Service - neologism suggestions and jury ratings
"""
import logging
from typing import Any, Iterable, List, Mapping, Optional

from pydantic import ValidationError
from sqlalchemy import select, func, exists, and_
from sqlalchemy.exc import SQLAlchemyError

from awadiko.config.settings import settings
from awadiko.core.auth import authorized
from awadiko.core.forms import field_errors, form_value, parse_indexed_rows
from awadiko.core.permissions import Permission
from awadiko.models.language import PartOfSpeech
from awadiko.models.concept import Concept
from awadiko.models.neo import Neo, NeoRating
from awadiko.models.term import Term
from awadiko.schemas.base import ActionResult
from awadiko.schemas.neo import MyRating, NeoRatingInput, NeoRead, NeoSuggestion
from awadiko.services.base import ActionService

logger = logging.getLogger(__name__)

CURATION_PATHS = ("/jury", "/vote")


class NeoCurationService(ActionService):
    """Collects Neo suggestions and maintains their rating aggregates"""

    @property
    def rejection_threshold(self) -> int:
        return settings.dictionary.neo_rejection_threshold

    def _my_ratings(self, user_id: int, neo_ids: Optional[Iterable[int]] = None) -> List[dict]:
        stmt = select(NeoRating.neo_id, NeoRating.value).where(NeoRating.user_id == user_id)
        if neo_ids is not None:
            stmt = stmt.where(NeoRating.neo_id.in_(list(neo_ids)))
        rows = self.db.execute(stmt.order_by(NeoRating.neo_id)).all()
        return [MyRating(neo_id=neo_id, value=value).model_dump() for neo_id, value in rows]

    @authorized(Permission.CURATE_NEOS)
    def curate_neo(self, form: Mapping[str, Any]) -> ActionResult:
        """
        Store suggested Neos for a term on behalf of the session user.

        Rows arrive flattened as ``suggestions[i].type`` / ``suggestions[i].text``
        and are validated independently; valid rows are saved even when
        others fail.
        """
        try:
            term_id = int(form_value(form, "term_id") or 0)
        except ValueError:
            term_id = 0
        if term_id <= 0:
            return ActionResult.fail({"term_id": ["Term is required"]})

        valid: List[NeoSuggestion] = []
        failed: List[dict] = []
        for index, row in parse_indexed_rows(form, "suggestions"):
            try:
                valid.append(NeoSuggestion(type=row.get("type"), text=row.get("text")))
            except ValidationError as e:
                failed.append({
                    "index": index,
                    "type": row.get("type"),
                    "text": row.get("text"),
                    "errors": field_errors(e),
                })

        try:
            if valid and self.db.get(Term, term_id) is None:
                return ActionResult.fail("Term not found")
            for suggestion in valid:
                self.db.add(Neo(term_id=term_id, user_id=self.user_id, text=suggestion.text, type=suggestion.type))
            self.db.commit()
        except SQLAlchemyError as e:
            failure = self.database_failure(
                "An error occurred while saving your suggestions. Please try again.", e, term_id=term_id
            )
            failure.message = failure.error
            return failure

        if valid:
            logger.info("Neos curated", extra={"term_id": term_id, "user_id": self.user_id, "count": len(valid)})
            self.revalidate(*CURATION_PATHS)

        data = {"created": len(valid), "failed_suggestions": failed}
        if failed:
            return ActionResult.fail(
                "Some suggestions were invalid.",
                message=f"{len(failed)} suggestion(s) could not be saved.",
                data=data,
            )
        return ActionResult.ok(data, message="Neos curated successfully!")

    @authorized(Permission.RATE_NEOS)
    def rate_neo(self, neo_id: int, value: int, reason: Optional[Any] = None) -> ActionResult:
        """
        Upsert the caller's rating and recompute the Neo's aggregates.

        The Neo row is locked for the duration of the transaction so
        concurrent raters serialize on the aggregate write.

        Returns:
            ActionResult whose data is the caller's ratings on the same term
        """
        try:
            rating_input = NeoRatingInput(value=value, reason=reason)
        except ValidationError as e:
            return ActionResult.fail(field_errors(e))

        try:
            neo = self.db.execute(
                select(Neo).where(Neo.id == neo_id).with_for_update()
            ).scalar_one_or_none()
            if neo is None:
                return ActionResult.fail("Neo not found")

            rating = self.db.execute(
                select(NeoRating).where(NeoRating.neo_id == neo_id, NeoRating.user_id == self.user_id)
            ).scalar_one_or_none()
            if rating is None:
                rating = NeoRating(neo_id=neo_id, user_id=self.user_id)
                self.db.add(rating)
            rating.value = rating_input.value
            rating.rejection_reason = rating_input.reason
            self.db.flush()

            count, total, rejections = self.db.execute(
                select(
                    func.count(NeoRating.id),
                    func.coalesce(func.sum(NeoRating.value), 0),
                    func.count(NeoRating.rejection_reason),
                ).where(NeoRating.neo_id == neo_id)
            ).one()

            neo.rating_count = count
            neo.rating_score = round(total / count, 2) if count else 0.0
            neo.reject_count = rejections
            self.db.commit()

            term_neo_ids = self.db.execute(select(Neo.id).where(Neo.term_id == neo.term_id)).scalars().all()
            ratings = self._my_ratings(self.user_id, term_neo_ids)
        except SQLAlchemyError as e:
            return self.database_failure("Failed to rate neo", e, neo_id=neo_id)

        self.revalidate(*CURATION_PATHS)
        return ActionResult.ok(ratings, message="Neo rated successfully")

    def _open_neos(self, user_id: Optional[int]):
        """Conditions for Neos still open to the user: below the rejection threshold and not yet rated by them."""
        conditions = [Neo.reject_count < self.rejection_threshold]
        if user_id is not None:
            conditions.append(
                ~exists().where(and_(NeoRating.neo_id == Neo.id, NeoRating.user_id == user_id))
            )
        return conditions

    def get_terms(self, language_id: int, user_id: Optional[int] = None) -> ActionResult:
        """
        Terms of a language that have Neos awaiting rating, with ``neo_count``.

        With ``user_id`` only Neos that user has not rated are counted and
        terms left without any are dropped.
        """
        try:
            neo_count = func.count(Neo.id).label("neo_count")
            stmt = (
                select(Term, Concept.gloss, PartOfSpeech.name, neo_count)
                .join(Neo, Neo.term_id == Term.id)
                .join(Concept, Concept.id == Term.concept_id)
                .join(PartOfSpeech, PartOfSpeech.id == Term.part_of_speech_id)
                .where(Term.language_id == language_id, *self._open_neos(user_id))
                .group_by(Term.id, Concept.gloss, PartOfSpeech.name)
                .having(func.count(Neo.id) > 0)
                .order_by(Term.text.asc(), Term.id.asc())
            )
            rows = self.db.execute(stmt).all()
            return ActionResult.ok([
                {
                    "id": term.id,
                    "text": term.text,
                    "meaning": term.meaning,
                    "phonics": term.phonics,
                    "gloss": gloss,
                    "part_of_speech": pos_name,
                    "neo_count": count,
                }
                for term, gloss, pos_name, count in rows
            ])
        except SQLAlchemyError as e:
            return self.database_failure("Failed to fetch terms", e, language_id=language_id)

    def get_term_neos(self, term_id: int, get_rated: bool = False, user_id: Optional[int] = None) -> ActionResult:
        """
        Neos of a term below the rejection threshold.

        Args:
            term_id: Term ID
            get_rated: False lists Neos the user has not rated yet, least-rated
                first; True lists rated Neos by score with the user's own rating
            user_id: Rater (defaults to the session user)
        """
        user_id = user_id if user_id is not None else self.user_id
        try:
            if get_rated:
                stmt = (
                    select(Neo)
                    .where(Neo.term_id == term_id, Neo.reject_count < self.rejection_threshold, Neo.rating_count > 0)
                    .order_by(Neo.rating_score.desc(), Neo.id.asc())
                )
            else:
                stmt = (
                    select(Neo)
                    .where(Neo.term_id == term_id, *self._open_neos(user_id))
                    .order_by(Neo.rating_count.asc(), Neo.id.asc())
                )
            neos = self.db.execute(stmt).scalars().all()

            mine = {}
            if get_rated and user_id is not None and neos:
                mine = {r["neo_id"]: r["value"] for r in self._my_ratings(user_id, [n.id for n in neos])}

            return ActionResult.ok([
                NeoRead.model_validate(neo).model_copy(update={"my_rating": mine.get(neo.id)}).model_dump()
                for neo in neos
            ])
        except SQLAlchemyError as e:
            return self.database_failure("Failed to fetch neos", e, term_id=term_id)

    def get_neos_rated_by_me(self, user_id: Optional[int] = None, neo_ids: Optional[List[int]] = None) -> ActionResult:
        user_id = user_id if user_id is not None else self.user_id
        if user_id is None:
            return ActionResult.ok([])
        try:
            return ActionResult.ok(self._my_ratings(user_id, neo_ids))
        except SQLAlchemyError as e:
            return self.database_failure("Failed to fetch ratings", e)
