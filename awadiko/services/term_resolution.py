"""
Find-or-create helpers shared by term writes, request submission and bulk import.

Lookups try an exact match first, then a case-insensitive one, and create
the record only when neither exists. Callers own the transaction.
"""
from typing import Iterable, List, Optional

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from awadiko.models.concept import Concept
from awadiko.models.domain import Domain


def find_domain(db: Session, name: str) -> Optional[Domain]:
    domain = db.execute(select(Domain).where(Domain.name == name)).scalar_one_or_none()
    if domain is None:
        domain = db.execute(
            select(Domain).where(func.lower(Domain.name) == name.lower()).order_by(Domain.id)
        ).scalars().first()
    return domain


def resolve_domain(db: Session, name: str) -> Domain:
    domain = find_domain(db, name)
    if domain is None:
        domain = Domain(name=name)
        db.add(domain)
        db.flush()
    return domain


def resolve_domains(db: Session, names: Iterable[str]) -> List[Domain]:
    """Resolve each non-blank name once, preserving first-seen order."""
    resolved: List[Domain] = []
    seen = set()
    for raw in names:
        name = (raw or "").strip()
        if not name:
            continue
        domain = resolve_domain(db, name)
        if domain.id not in seen:
            seen.add(domain.id)
            resolved.append(domain)
    return resolved


def resolve_concept_by_gloss(db: Session, gloss: str) -> Concept:
    concept = db.execute(
        select(Concept).where(Concept.gloss == gloss).order_by(Concept.id)
    ).scalars().first()
    if concept is None:
        concept = db.execute(
            select(Concept).where(func.lower(Concept.gloss) == gloss.lower()).order_by(Concept.id)
        ).scalars().first()
    if concept is None:
        concept = Concept(gloss=gloss)
        db.add(concept)
        db.flush()
    return concept


def create_concept(db: Session, gloss: str) -> Concept:
    concept = Concept(gloss=gloss)
    db.add(concept)
    db.flush()
    return concept
