"""
Dictionary Service - public dictionary reads and translation request submission
"""
import json
import logging
from typing import Any, Mapping, Optional

from pydantic import ValidationError
from sqlalchemy import select, func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload

from awadiko.core.forms import field_errors, form_value, parse_json_list
from awadiko.models.domain import DomainsOnRequests, DomainsOnTerms
from awadiko.models.term import Term
from awadiko.models.translation_request import TranslationRequest
from awadiko.models.user import UserProfile, ProfileTargetLanguage
from awadiko.schemas.base import ActionResult
from awadiko.schemas.translation_request import TranslationRequestInput
from awadiko.schemas.user import LanguageRead, UserProfileRead
from awadiko.services.base import ActionService, LIKE_ESCAPE, like_pattern, page_cache_key
from awadiko.services.term_resolution import resolve_domains

logger = logging.getLogger(__name__)

DICTIONARY_PATH = "/dictionary"


class DictionaryService(ActionService):
    """Serves dictionary pages and accepts translation requests"""

    def submit_request(self, form: Mapping[str, Any]) -> ActionResult:
        """
        Submit a translation request for the session user.

        Args:
            form: Posted fields ``word``, ``meaning``, ``source_language_id``,
                ``target_language_id``, ``part_of_speech_id`` and ``domains``
                (a stringified JSON list)

        Returns:
            ActionResult; validation and duplicate failures carry a field error map
        """
        if self.user is None:
            return ActionResult.fail("Unauthorized: Please sign in to submit a request")

        try:
            data = TranslationRequestInput(
                word=form_value(form, "word"),
                meaning=form_value(form, "meaning"),
                source_language_id=form_value(form, "source_language_id"),
                target_language_id=form_value(form, "target_language_id"),
                part_of_speech_id=form_value(form, "part_of_speech_id"),
                domains=parse_json_list(form.get("domains")),
            )
        except ValidationError as e:
            return ActionResult.fail(field_errors(e), message="Missing Fields. Failed to submit request.")

        try:
            existing_request = self.db.execute(
                select(TranslationRequest.id).where(
                    func.lower(TranslationRequest.word) == data.word.lower(),
                    func.lower(TranslationRequest.meaning) == data.meaning.lower(),
                    TranslationRequest.source_language_id == data.source_language_id,
                    TranslationRequest.target_language_id == data.target_language_id,
                    TranslationRequest.part_of_speech_id == data.part_of_speech_id,
                ).limit(1)
            ).first()
            if existing_request:
                return ActionResult.fail(
                    {"word": ["This word already has a pending translation request."]},
                    message="This word with the same meaning has already been requested. Please be patient.",
                )

            existing_term = self.db.execute(
                select(Term.id).where(
                    func.lower(Term.text) == data.word.lower(),
                    func.lower(Term.meaning) == data.meaning.lower(),
                    Term.language_id == data.source_language_id,
                ).limit(1)
            ).first()
            if existing_term:
                return ActionResult.fail(
                    {"word": ["This word already exists in the dictionary."]},
                    message="This word with the same meaning already exists in the dictionary.",
                )

            request = TranslationRequest(
                word=data.word,
                meaning=data.meaning,
                source_language_id=data.source_language_id,
                target_language_id=data.target_language_id,
                part_of_speech_id=data.part_of_speech_id,
                user_id=self.user.id,
            )
            for domain in resolve_domains(self.db, data.domains):
                request.domains.append(DomainsOnRequests(domain_id=domain.id))
            self.db.add(request)
            self.db.commit()
        except SQLAlchemyError as e:
            failure = self.database_failure("Database Error: Failed to submit request.", e)
            failure.message = failure.error
            return failure

        logger.info("Translation request submitted", extra={"translation_request_id": request.id, "user_id": self.user.id})
        self.revalidate(DICTIONARY_PATH)
        return ActionResult.ok(
            {"id": request.id},
            message="Request submitted successfully! It will be reviewed by an admin.",
        )

    def get_dictionary_terms(
        self,
        language_id: int,
        community_language_id: int,
        skip: int = 0,
        take: int = 20,
        search_query: str = "",
        alphabet: str = "",
    ) -> ActionResult:
        """
        Page through a language's terms alphabetically.

        Each term carries ``translation``: the text of a term in the
        community language sharing its concept, or None.
        """
        cache_key = page_cache_key(
            DICTIONARY_PATH, language_id, community_language_id, skip, take, search_query.lower(), alphabet.lower()
        )
        if self.cache:
            cached = self.cache.get(cache_key)
            if cached:
                return ActionResult.ok(json.loads(cached))

        try:
            conditions = [Term.language_id == language_id]
            if search_query:
                pattern = like_pattern(search_query)
                conditions.append(
                    or_(Term.text.ilike(pattern, escape=LIKE_ESCAPE), Term.meaning.ilike(pattern, escape=LIKE_ESCAPE))
                )
            if alphabet:
                conditions.append(Term.text.ilike(like_pattern(alphabet, leading=False), escape=LIKE_ESCAPE))

            terms = self.db.execute(
                select(Term)
                .where(*conditions)
                .options(
                    selectinload(Term.part_of_speech),
                    selectinload(Term.domains).selectinload(DomainsOnTerms.domain),
                )
                .order_by(Term.text.asc(), Term.id.asc())
                .offset(skip)
                .limit(take)
            ).scalars().all()
            total = self.db.execute(select(func.count(Term.id)).where(*conditions)).scalar_one()

            translations = {}
            concept_ids = {t.concept_id for t in terms}
            if concept_ids:
                siblings = self.db.execute(
                    select(Term.concept_id, Term.text)
                    .where(Term.concept_id.in_(concept_ids), Term.language_id == community_language_id)
                    .order_by(Term.id)
                ).all()
                for concept_id, text in siblings:
                    translations.setdefault(concept_id, text)

            data = {
                "terms": [
                    {
                        "id": t.id,
                        "text": t.text,
                        "meaning": t.meaning,
                        "phonics": t.phonics,
                        "part_of_speech": t.part_of_speech.name,
                        "domains": [link.domain.name for link in t.domains],
                        "translation": translations.get(t.concept_id),
                    }
                    for t in terms
                ],
                "has_more": skip + take < total,
            }
        except SQLAlchemyError as e:
            return self.database_failure("Failed to fetch dictionary terms", e, language_id=language_id)

        if self.cache:
            self.cache.set(cache_key, json.dumps(data))
        return ActionResult.ok(data)

    def get_available_alphabets(self, language_id: int) -> ActionResult:
        """Sorted distinct upper-cased first letters of a language's terms."""
        try:
            texts = self.db.execute(select(Term.text).where(Term.language_id == language_id)).scalars()
            letters = sorted({text[0].upper() for text in texts if text})
            return ActionResult.ok(letters)
        except SQLAlchemyError as e:
            return self.database_failure("Failed to fetch alphabets", e, language_id=language_id)

    def get_user_profile_for_request(self, user_id: int) -> Optional[dict]:
        """Profile with ui language and target languages, or None when unavailable."""
        try:
            profile = self.db.execute(
                select(UserProfile)
                .where(UserProfile.user_id == user_id)
                .options(
                    selectinload(UserProfile.ui_language),
                    selectinload(UserProfile.target_languages).selectinload(ProfileTargetLanguage.language),
                )
            ).scalar_one_or_none()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Failed to fetch user profile", exc_info=e, extra={"user_id": user_id})
            return None

        if profile is None:
            return None
        return UserProfileRead(
            id=profile.id,
            user_id=profile.user_id,
            ui_language=LanguageRead.model_validate(profile.ui_language) if profile.ui_language else None,
            target_languages=[LanguageRead.model_validate(t.language) for t in profile.target_languages],
        ).model_dump()
