"""
Shared fixtures: in-memory SQLite database, seed data, users per role and
an HTTP client bound to the test database.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("REDIS_ENABLED", "false")
os.environ.setdefault("SECURITY_BCRYPT_ROUNDS", "4")
os.environ.setdefault("LOG_JSON", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import awadiko.models  # noqa: F401  registers every table
from awadiko.core.db import Base, get_db
from awadiko.core.jwt import create_access_token
from awadiko.core.permissions import Role
from awadiko.core.security import hash_password
from awadiko.models.concept import Concept
from awadiko.models.domain import DomainsOnTerms
from awadiko.models.language import Language, PartOfSpeech
from awadiko.models.term import Term
from awadiko.models.user import User

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)

TEST_PASSWORD = "Passw0rd!"


class FakeCache:
    """In-memory stand-in for CacheClient that records invalidated prefixes"""

    def __init__(self):
        self.store = {}
        self.invalidated = []

    def get(self, key):
        return self.store.get(key)

    def set(self, key, value, ttl_seconds=None):
        self.store[key] = value
        return True

    def delete(self, key):
        return self.store.pop(key, None) is not None

    def delete_prefix(self, prefix):
        self.invalidated.append(prefix)
        keys = [k for k in self.store if k.startswith(prefix)]
        for key in keys:
            del self.store[key]
        return len(keys)


@pytest.fixture
def db_session():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def fake_cache():
    return FakeCache()


@pytest.fixture
def languages(db_session):
    eng = Language(code="eng", name="English")
    yor = Language(code="yor", name="Yoruba")
    db_session.add_all([eng, yor])
    db_session.commit()
    return {"eng": eng, "yor": yor}


@pytest.fixture
def parts_of_speech(db_session):
    noun = PartOfSpeech(name="Noun")
    verb = PartOfSpeech(name="Verb")
    db_session.add_all([noun, verb])
    db_session.commit()
    return {"noun": noun, "verb": verb}


def make_user(session, role: Role, email: str | None = None, name: str | None = None) -> User:
    user = User(
        email=email or f"{role.value.lower()}@example.com",
        name=name or role.value.title(),
        hashed_password=hash_password(TEST_PASSWORD),
        role=role,
    )
    session.add(user)
    session.commit()
    return user


def make_term(session, text, meaning, language, part_of_speech, concept=None, domains=()):
    if concept is None:
        concept = Concept(gloss=meaning)
        session.add(concept)
        session.flush()
    term = Term(
        text=text,
        meaning=meaning,
        language_id=language.id,
        part_of_speech_id=part_of_speech.id,
        concept_id=concept.id,
    )
    for domain in domains:
        term.domains.append(DomainsOnTerms(domain_id=domain.id))
    session.add(term)
    session.commit()
    return term


@pytest.fixture
def admin_user(db_session):
    return make_user(db_session, Role.ADMIN)


@pytest.fixture
def juror_user(db_session):
    return make_user(db_session, Role.JUROR)


@pytest.fixture
def curator_user(db_session):
    return make_user(db_session, Role.CURATOR)


@pytest.fixture
def contributor_user(db_session):
    return make_user(db_session, Role.CONTRIBUTOR)


@pytest.fixture
def explorer_user(db_session):
    return make_user(db_session, Role.EXPLORER)


def auth_headers(user: User) -> dict:
    token = create_access_token(str(user.id), scopes=[user.role.value])
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def authenticated_headers():
    return auth_headers


@pytest.fixture
def user_factory(db_session):
    def factory(role: Role, email: str | None = None, name: str | None = None) -> User:
        return make_user(db_session, role, email=email, name=name)
    return factory


@pytest.fixture
def term_factory(db_session):
    def factory(text, meaning, language, part_of_speech, concept=None, domains=()):
        return make_term(db_session, text, meaning, language, part_of_speech, concept=concept, domains=domains)
    return factory


@pytest.fixture
def client(db_session):
    from awadiko.main import app

    def override_get_db():
        session = TestingSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
