"""
Domain Admin Service - CRUD over categorization tags
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
from awadiko.models.domain import Domain, DomainsOnTerms, DomainsOnRequests
from awadiko.schemas.base import ActionResult
from awadiko.schemas.domain import DomainInput, DomainRead
from awadiko.services.base import ActionService, LIKE_ESCAPE, like_pattern

logger = logging.getLogger(__name__)

DOMAINS_PATH = "/admin/dictionary-domains"
DICTIONARY_PATH = "/dictionary"


class DomainAdminService(ActionService):
    """Admin management of Domains"""

    def _usage(self, domain_id: int) -> tuple[int, int]:
        terms = self.db.execute(
            select(func.count()).select_from(DomainsOnTerms).where(DomainsOnTerms.domain_id == domain_id)
        ).scalar_one()
        requests = self.db.execute(
            select(func.count()).select_from(DomainsOnRequests).where(DomainsOnRequests.domain_id == domain_id)
        ).scalar_one()
        return terms, requests

    def _name_taken(self, name: str, exclude_id: int | None = None) -> bool:
        stmt = select(Domain.id).where(func.lower(Domain.name) == name.lower())
        if exclude_id is not None:
            stmt = stmt.where(Domain.id != exclude_id)
        return self.db.execute(stmt.limit(1)).first() is not None

    @authorized(Permission.MANAGE_DICTIONARY)
    def get_domains(self, skip: int = 0, take: int = 50, search: str = "") -> ActionResult:
        """List domains by name with term and request usage counts."""
        try:
            term_count = (
                select(func.count())
                .select_from(DomainsOnTerms)
                .where(DomainsOnTerms.domain_id == Domain.id)
                .correlate(Domain)
                .scalar_subquery()
            )
            request_count = (
                select(func.count())
                .select_from(DomainsOnRequests)
                .where(DomainsOnRequests.domain_id == Domain.id)
                .correlate(Domain)
                .scalar_subquery()
            )
            stmt = select(Domain, term_count.label("term_count"), request_count.label("request_count"))
            count_stmt = select(func.count(Domain.id))
            if search:
                condition = Domain.name.ilike(like_pattern(search), escape=LIKE_ESCAPE)
                stmt = stmt.where(condition)
                count_stmt = count_stmt.where(condition)

            rows = self.db.execute(stmt.order_by(Domain.name.asc()).offset(skip).limit(take)).all()
            total = self.db.execute(count_stmt).scalar_one()

            items = [
                DomainRead(id=domain.id, name=domain.name, term_count=terms, request_count=requests).model_dump()
                for domain, terms, requests in rows
            ]
            return ActionResult.ok({"items": items, "total": total})
        except SQLAlchemyError as e:
            return self.database_failure("Failed to fetch domains", e)

    @authorized(Permission.MANAGE_DICTIONARY)
    def create_domain(self, form: Mapping[str, Any]) -> ActionResult:
        try:
            data = DomainInput(name=form_value(form, "name"))
        except ValidationError as e:
            return ActionResult.fail(field_errors(e))

        try:
            if self._name_taken(data.name):
                return ActionResult.fail({"name": ["Domain with this name already exists."]})

            domain = Domain(name=data.name)
            self.db.add(domain)
            self.db.commit()
        except SQLAlchemyError as e:
            return self.database_failure("Database error while creating domain", e)

        log_audit(self.db, self.user_id, "admin:domain:created", domain.id, {"name": domain.name})
        self.revalidate(DOMAINS_PATH)
        return ActionResult.ok(DomainRead(id=domain.id, name=domain.name).model_dump())

    @authorized(Permission.MANAGE_DICTIONARY)
    def update_domain(self, domain_id: int, form: Mapping[str, Any]) -> ActionResult:
        try:
            data = DomainInput(name=form_value(form, "name"))
        except ValidationError as e:
            return ActionResult.fail(field_errors(e))

        try:
            domain = self.db.get(Domain, domain_id)
            if domain is None:
                return ActionResult.fail("Domain not found")
            if self._name_taken(data.name, exclude_id=domain_id):
                return ActionResult.fail({"name": ["Another domain with this name already exists."]})

            domain.name = data.name
            self.db.commit()
            terms, requests = self._usage(domain_id)
        except SQLAlchemyError as e:
            return self.database_failure("Database error while updating domain", e, domain_id=domain_id)

        log_audit(self.db, self.user_id, "admin:domain:updated", domain_id, {"name": data.name})
        self.revalidate(DOMAINS_PATH, DICTIONARY_PATH)
        return ActionResult.ok(
            DomainRead(id=domain.id, name=domain.name, term_count=terms, request_count=requests).model_dump()
        )

    @authorized(Permission.MANAGE_DICTIONARY)
    def delete_domain(self, domain_id: int) -> ActionResult:
        try:
            domain = self.db.get(Domain, domain_id)
            if domain is None:
                return ActionResult.fail("Domain not found")

            terms, requests = self._usage(domain_id)
            if terms > 0 or requests > 0:
                return ActionResult.fail(
                    f"Cannot delete: Domain is used in {terms} term(s) and {requests} request(s)."
                )

            self.db.delete(domain)
            self.db.commit()
        except SQLAlchemyError as e:
            return self.database_failure("Failed to delete domain", e, domain_id=domain_id)

        log_audit(self.db, self.user_id, "admin:domain:deleted", domain_id)
        self.revalidate(DOMAINS_PATH)
        return ActionResult.ok()
