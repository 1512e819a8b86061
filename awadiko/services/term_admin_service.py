"""
Term Admin Service - CRUD over canonical dictionary entries and bulk import
"""
import csv
import io
import logging
import re
from typing import Any, Iterable, List, Mapping, Optional, Tuple

from pydantic import ValidationError
from sqlalchemy import select, func, or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import selectinload

from awadiko.core.audit import log_audit
from awadiko.core.auth import authorized
from awadiko.core.forms import field_errors, form_value, parse_json_list
from awadiko.core.permissions import Permission
from awadiko.models.concept import Concept
from awadiko.models.domain import DomainsOnTerms
from awadiko.models.language import PartOfSpeech
from awadiko.models.term import Term
from awadiko.schemas.base import ActionResult
from awadiko.schemas.term import BulkTermRow, TermInput
from awadiko.services.base import ActionService, LIKE_ESCAPE, like_pattern
from awadiko.services.term_resolution import (
    create_concept,
    resolve_concept_by_gloss,
    resolve_domains,
)

logger = logging.getLogger(__name__)

TERMS_PATH = "/admin/dictionary-terms"
DICTIONARY_PATH = "/dictionary"

_DOMAIN_SEPARATOR = re.compile(r"[;|]")
_CSV_COLUMNS = {
    "text": "text",
    "word": "text",
    "meaning": "meaning",
    "partofspeech": "part_of_speech",
    "part_of_speech": "part_of_speech",
    "pos": "part_of_speech",
    "phonics": "phonics",
    "domains": "domains",
}


def parse_terms_csv(content: str, language_id: int) -> Tuple[List[BulkTermRow], List[str]]:
    """
    Parse an uploaded CSV into bulk import rows.

    The header names the columns (``text,meaning,partOfSpeech,phonics,domains``);
    domains within a cell are separated by ``;`` or ``|``. Rows missing
    text, meaning or part of speech are reported and skipped.

    Returns:
        (rows, errors)
    """
    reader = csv.DictReader(io.StringIO(content.lstrip("\ufeff")))
    if not reader.fieldnames:
        return [], ["CSV file is empty"]

    columns = {
        name: _CSV_COLUMNS[name.strip().lower()]
        for name in reader.fieldnames
        if name and name.strip().lower() in _CSV_COLUMNS
    }
    missing = {"text", "meaning", "part_of_speech"} - set(columns.values())
    if missing:
        return [], [f"CSV header is missing column(s): {', '.join(sorted(missing))}"]

    rows: List[BulkTermRow] = []
    errors: List[str] = []
    for raw in reader:
        line_no = reader.line_num
        record = {field: (raw.get(name) or "").strip() for name, field in columns.items()}
        if not any(record.values()):
            continue
        if not record.get("text") or not record.get("meaning") or not record.get("part_of_speech"):
            errors.append(f"Line {line_no}: text, meaning and partOfSpeech are required")
            continue
        rows.append(
            BulkTermRow(
                text=record["text"],
                meaning=record["meaning"],
                part_of_speech=record["part_of_speech"],
                phonics=record.get("phonics") or None,
                domains=[d.strip() for d in _DOMAIN_SEPARATOR.split(record.get("domains", "")) if d.strip()],
                language_id=language_id,
            )
        )
    return rows, errors


def _serialize_term(term: Term) -> dict:
    return {
        "id": term.id,
        "text": term.text,
        "meaning": term.meaning,
        "phonics": term.phonics,
        "language": {"id": term.language.id, "name": term.language.name},
        "part_of_speech": {"id": term.part_of_speech.id, "name": term.part_of_speech.name},
        "domains": [{"id": link.domain.id, "name": link.domain.name} for link in term.domains],
        "concept_id": term.concept_id,
        "concept": {"id": term.concept.id, "gloss": term.concept.gloss},
        "vote_score": term.vote_score,
        "created_at": term.created_at,
    }


class TermAdminService(ActionService):
    """Admin management of Terms"""

    def _parse_form(self, form: Mapping[str, Any]) -> TermInput:
        return TermInput(
            text=form_value(form, "text"),
            meaning=form_value(form, "meaning"),
            concept_id=form_value(form, "concept_id"),
            phonics=form_value(form, "phonics"),
            language_id=form_value(form, "language_id"),
            part_of_speech_id=form_value(form, "part_of_speech_id"),
            domains=parse_json_list(form.get("domains")),
        )

    def _duplicate_exists(self, data: TermInput, exclude_id: Optional[int] = None) -> bool:
        stmt = select(Term.id).where(
            func.lower(Term.text) == data.text.lower(),
            func.lower(Term.meaning) == data.meaning.lower(),
            Term.language_id == data.language_id,
        )
        if exclude_id is not None:
            stmt = stmt.where(Term.id != exclude_id)
        return self.db.execute(stmt.limit(1)).first() is not None

    def _resolve_concept_id(self, data: TermInput) -> int:
        if data.concept_id:
            return data.concept_id
        return create_concept(self.db, data.meaning).id

    def _link_domains(self, term: Term, names: Iterable[str]) -> None:
        for domain in resolve_domains(self.db, names):
            term.domains.append(DomainsOnTerms(domain_id=domain.id))

    @authorized(Permission.MANAGE_DICTIONARY)
    def get_terms(
        self,
        skip: int = 0,
        take: int = 50,
        search: str = "",
        language_id: Optional[int] = None,
    ) -> ActionResult:
        """
        List terms newest first with language, part of speech, domains and concept.

        Args:
            skip: Offset into the result set
            take: Page size
            search: Case-insensitive substring of text or meaning
            language_id: Restrict to one language

        Returns:
            ActionResult with ``{"items": [...], "total": n}``
        """
        try:
            conditions = []
            if search:
                pattern = like_pattern(search)
                conditions.append(
                    or_(Term.text.ilike(pattern, escape=LIKE_ESCAPE), Term.meaning.ilike(pattern, escape=LIKE_ESCAPE))
                )
            if language_id:
                conditions.append(Term.language_id == language_id)

            stmt = (
                select(Term)
                .where(*conditions)
                .options(
                    selectinload(Term.language),
                    selectinload(Term.part_of_speech),
                    selectinload(Term.concept),
                    selectinload(Term.domains).selectinload(DomainsOnTerms.domain),
                )
                .order_by(Term.created_at.desc(), Term.id.desc())
                .offset(skip)
                .limit(take)
            )
            terms = self.db.execute(stmt).scalars().all()
            total = self.db.execute(select(func.count(Term.id)).where(*conditions)).scalar_one()
            return ActionResult.ok({"items": [_serialize_term(t) for t in terms], "total": total})
        except SQLAlchemyError as e:
            return self.database_failure("Failed to fetch terms", e)

    @authorized(Permission.MANAGE_DICTIONARY)
    def create_term(self, form: Mapping[str, Any]) -> ActionResult:
        try:
            data = self._parse_form(form)
        except ValidationError as e:
            return ActionResult.fail(field_errors(e))

        try:
            if self._duplicate_exists(data):
                return ActionResult.fail(
                    {"text": ["Term with this text and meaning already exists in this language."]}
                )
            if data.concept_id and self.db.get(Concept, data.concept_id) is None:
                return ActionResult.fail({"concept_id": ["Concept not found."]})

            term = Term(
                text=data.text,
                meaning=data.meaning,
                phonics=data.phonics,
                language_id=data.language_id,
                part_of_speech_id=data.part_of_speech_id,
                concept_id=self._resolve_concept_id(data),
            )
            self._link_domains(term, data.domains)
            self.db.add(term)
            self.db.commit()
        except SQLAlchemyError as e:
            return self.database_failure("Database error while creating term", e)

        log_audit(self.db, self.user_id, "admin:term:created", term.id, {"text": term.text})
        self.revalidate(TERMS_PATH, DICTIONARY_PATH)
        return ActionResult.ok({"id": term.id, "concept_id": term.concept_id})

    @authorized(Permission.MANAGE_DICTIONARY)
    def update_term(self, term_id: int, form: Mapping[str, Any]) -> ActionResult:
        try:
            data = self._parse_form(form)
        except ValidationError as e:
            return ActionResult.fail(field_errors(e))

        try:
            term = self.db.get(Term, term_id)
            if term is None:
                return ActionResult.fail("Term not found")
            if self._duplicate_exists(data, exclude_id=term_id):
                return ActionResult.fail({"text": ["Another term with this text and meaning already exists."]})
            if data.concept_id and self.db.get(Concept, data.concept_id) is None:
                return ActionResult.fail({"concept_id": ["Concept not found."]})

            term.domains.clear()
            self.db.flush()

            term.text = data.text
            term.meaning = data.meaning
            term.phonics = data.phonics
            term.language_id = data.language_id
            term.part_of_speech_id = data.part_of_speech_id
            term.concept_id = self._resolve_concept_id(data)
            self._link_domains(term, data.domains)
            self.db.commit()
        except SQLAlchemyError as e:
            return self.database_failure("Database error while updating term", e, term_id=term_id)

        log_audit(self.db, self.user_id, "admin:term:updated", term_id, {"text": data.text})
        self.revalidate(TERMS_PATH, DICTIONARY_PATH)
        return ActionResult.ok({"id": term.id, "concept_id": term.concept_id})

    @authorized(Permission.MANAGE_DICTIONARY)
    def delete_term(self, term_id: int) -> ActionResult:
        try:
            term = self.db.get(Term, term_id)
            if term is None:
                return ActionResult.fail("Failed to delete term")
            self.db.delete(term)
            self.db.commit()
        except SQLAlchemyError as e:
            return self.database_failure("Failed to delete term", e, term_id=term_id)

        log_audit(self.db, self.user_id, "admin:term:deleted", term_id)
        self.revalidate(TERMS_PATH, DICTIONARY_PATH)
        return ActionResult.ok()

    @authorized(Permission.MANAGE_DICTIONARY)
    def bulk_add_terms(self, rows: List[BulkTermRow]) -> ActionResult:
        """
        Insert rows one transaction at a time, collecting per-row errors.

        A failing row never aborts the batch; the result is successful with
        ``{"count": inserted, "errors": [...]}`` (errors omitted when empty).
        """
        try:
            pos_map = {
                pos.name.strip().lower(): pos.id
                for pos in self.db.execute(select(PartOfSpeech)).scalars()
            }
        except SQLAlchemyError as e:
            return self.database_failure("Database error during bulk import", e)

        added = 0
        errors: List[str] = []
        for row in rows:
            pos_id = pos_map.get(row.part_of_speech.strip().lower())
            if pos_id is None:
                errors.append(f'Row "{row.text}": Unknown part of speech "{row.part_of_speech}"')
                continue

            meaning = row.meaning.strip()
            try:
                concept = resolve_concept_by_gloss(self.db, meaning)
                term = Term(
                    text=row.text.strip(),
                    meaning=meaning,
                    phonics=(row.phonics or "").strip() or None,
                    language_id=row.language_id,
                    part_of_speech_id=pos_id,
                    concept_id=concept.id,
                )
                self._link_domains(term, row.domains)
                self.db.add(term)
                self.db.commit()
                added += 1
            except IntegrityError:
                self.db.rollback()
                errors.append(f'Row "{row.text}": Already exists in the database.')
            except SQLAlchemyError as e:
                self.db.rollback()
                logger.warning("Bulk import row failed", extra={"text": row.text, "error": str(e)})
                errors.append(f'Row "{row.text}": Failed to insert. {e}')

        log_audit(
            self.db, self.user_id, "admin:term:bulk_import", None,
            {"count": added, "failed": len(errors)},
        )
        self.revalidate(TERMS_PATH, DICTIONARY_PATH)

        data = {"count": added}
        if errors:
            data["errors"] = errors
        return ActionResult.ok(data)

    @authorized(Permission.MANAGE_DICTIONARY)
    def get_total_term_count(self) -> ActionResult:
        try:
            count = self.db.execute(select(func.count(Term.id))).scalar_one()
            return ActionResult.ok({"count": count})
        except SQLAlchemyError as e:
            failure = self.database_failure("Failed to get total term count", e)
            failure.data = {"count": 0}
            return failure
