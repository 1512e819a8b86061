"""
Unit tests for term administration and bulk import
"""
from sqlalchemy import select, func

from awadiko.models.audit_log import AuditLog
from awadiko.models.concept import Concept
from awadiko.models.domain import Domain, DomainsOnTerms
from awadiko.models.term import Term
from awadiko.schemas.term import BulkTermRow
from awadiko.services.term_admin_service import TermAdminService, parse_terms_csv


def _form(languages, parts_of_speech, **overrides):
    form = {
        "text": "omi",
        "meaning": "water",
        "language_id": str(languages["yor"].id),
        "part_of_speech_id": str(parts_of_speech["noun"].id),
        "domains": "[]",
    }
    form.update(overrides)
    return form


def _count(db, column):
    return db.execute(select(func.count(column))).scalar_one()


def test_create_term_with_new_concept_and_domains(db_session, admin_user, languages, parts_of_speech, fake_cache):
    db_session.add(Domain(name="Tech"))
    db_session.commit()
    service = TermAdminService(db_session, admin_user, fake_cache)

    result = service.create_term(_form(languages, parts_of_speech, domains='["Tech","Science"]'))

    assert result.success is True
    term = db_session.get(Term, result.data["id"])
    assert term.concept.gloss == "water"
    assert sorted(link.domain.name for link in term.domains) == ["Science", "Tech"]
    assert _count(db_session, Domain.id) == 2
    assert _count(db_session, DomainsOnTerms.term_id) == 2
    assert fake_cache.invalidated == ["page:/admin/dictionary-terms:", "page:/dictionary:"]


def test_create_term_reuses_existing_domains_case_insensitively(db_session, admin_user, languages, parts_of_speech):
    db_session.add_all([Domain(name="Tech"), Domain(name="Science")])
    db_session.commit()

    result = TermAdminService(db_session, admin_user).create_term(
        _form(languages, parts_of_speech, domains='["tech", "Science", "Science"]')
    )

    assert result.success is True
    assert _count(db_session, Domain.id) == 2
    assert _count(db_session, DomainsOnTerms.term_id) == 2


def test_create_term_with_given_concept(db_session, admin_user, languages, parts_of_speech):
    concept = Concept(gloss="liquid")
    db_session.add(concept)
    db_session.commit()
    service = TermAdminService(db_session, admin_user)

    result = service.create_term(_form(languages, parts_of_speech, concept_id=str(concept.id)))
    assert result.data["concept_id"] == concept.id

    missing = service.create_term(_form(languages, parts_of_speech, text="ina", concept_id="999"))
    assert missing.success is False
    assert missing.error == {"concept_id": ["Concept not found."]}


def test_create_term_unparsable_domains_are_ignored(db_session, admin_user, languages, parts_of_speech):
    result = TermAdminService(db_session, admin_user).create_term(
        _form(languages, parts_of_speech, domains="Tech,Science")
    )
    assert result.success is True
    assert _count(db_session, DomainsOnTerms.term_id) == 0


def test_create_term_validation_errors(db_session, admin_user, languages, parts_of_speech):
    result = TermAdminService(db_session, admin_user).create_term(
        _form(languages, parts_of_speech, text="x" * 101, language_id="", part_of_speech_id="0")
    )

    assert result.success is False
    assert result.error == {
        "text": ["Word text must be at most 100 characters"],
        "language_id": ["Language is required"],
        "part_of_speech_id": ["Part of Speech is required"],
    }


def test_duplicate_term_rejected_case_insensitively(db_session, admin_user, languages, parts_of_speech):
    service = TermAdminService(db_session, admin_user)
    service.create_term(_form(languages, parts_of_speech))

    result = service.create_term(_form(languages, parts_of_speech, text="OMI", meaning="Water"))

    assert result.success is False
    assert result.error == {"text": ["Term with this text and meaning already exists in this language."]}

    other_language = service.create_term(_form(languages, parts_of_speech, language_id=str(languages["eng"].id)))
    assert other_language.success is True


def test_update_term_duplicate_excludes_self(db_session, admin_user, languages, parts_of_speech):
    service = TermAdminService(db_session, admin_user)
    omi = service.create_term(_form(languages, parts_of_speech)).data
    ina = service.create_term(_form(languages, parts_of_speech, text="ina", meaning="fire")).data

    same = service.update_term(omi["id"], _form(languages, parts_of_speech, phonics="ò-mi"))
    assert same.success is True

    clash = service.update_term(ina["id"], _form(languages, parts_of_speech, text="Omi"))
    assert clash.success is False
    assert clash.error == {"text": ["Another term with this text and meaning already exists."]}

    missing = service.update_term(999, _form(languages, parts_of_speech, text="new"))
    assert missing.error == "Term not found"


def test_update_term_replaces_domain_links(db_session, admin_user, languages, parts_of_speech):
    service = TermAdminService(db_session, admin_user)
    created = service.create_term(_form(languages, parts_of_speech, domains='["Tech","Science"]')).data

    result = service.update_term(created["id"], _form(languages, parts_of_speech, domains='["Science","Law"]'))

    assert result.success is True
    names = db_session.execute(
        select(Domain.name)
        .join(DomainsOnTerms, DomainsOnTerms.domain_id == Domain.id)
        .where(DomainsOnTerms.term_id == created["id"])
        .order_by(Domain.name)
    ).scalars().all()
    assert names == ["Law", "Science"]


def test_delete_term(db_session, admin_user, languages, parts_of_speech):
    service = TermAdminService(db_session, admin_user)
    created = service.create_term(_form(languages, parts_of_speech, domains='["Tech"]')).data

    assert service.delete_term(created["id"]).success is True
    assert _count(db_session, Term.id) == 0
    assert _count(db_session, DomainsOnTerms.term_id) == 0

    assert service.delete_term(created["id"]).error == "Failed to delete term"


def test_get_terms_and_count(db_session, admin_user, languages, parts_of_speech):
    service = TermAdminService(db_session, admin_user)
    service.create_term(_form(languages, parts_of_speech, domains='["Nature"]'))
    service.create_term(_form(languages, parts_of_speech, text="fire", meaning="flame", language_id=str(languages["eng"].id)))

    listing = service.get_terms(language_id=languages["yor"].id)
    assert listing.data["total"] == 1
    item = listing.data["items"][0]
    assert item["text"] == "omi"
    assert item["language"] == {"id": languages["yor"].id, "name": "Yoruba"}
    assert item["part_of_speech"]["name"] == "Noun"
    assert [d["name"] for d in item["domains"]] == ["Nature"]
    assert item["concept"]["gloss"] == "water"

    searched = service.get_terms(search="FLAME")
    assert [t["text"] for t in searched.data["items"]] == ["fire"]

    assert service.get_total_term_count().data == {"count": 2}


def test_term_admin_requires_manage_dictionary(db_session, juror_user, languages, parts_of_speech):
    result = TermAdminService(db_session, juror_user).create_term(_form(languages, parts_of_speech))
    assert result.error == "Forbidden: Missing permission 'manage:dictionary'"


def _row(languages, **overrides):
    values = {
        "text": "omi",
        "meaning": "water",
        "part_of_speech": "noun",
        "language_id": languages["yor"].id,
    }
    values.update(overrides)
    return BulkTermRow(**values)


def test_bulk_add_terms_collects_row_errors(db_session, admin_user, languages, parts_of_speech):
    service = TermAdminService(db_session, admin_user)
    rows = [
        _row(languages, domains=["Nature", " "]),
        _row(languages, text="ina", meaning="fire", part_of_speech="adverb"),
        _row(languages),
        _row(languages, text="sure", meaning="Water", part_of_speech=" VERB ", phonics="  "),
    ]

    result = service.bulk_add_terms(rows)

    assert result.success is True
    assert result.data["count"] == 2
    assert result.data["errors"] == [
        'Row "ina": Unknown part of speech "adverb"',
        'Row "omi": Already exists in the database.',
    ]

    terms = db_session.execute(select(Term).order_by(Term.id)).scalars().all()
    assert [t.text for t in terms] == ["omi", "sure"]
    assert terms[0].concept_id == terms[1].concept_id
    assert terms[1].part_of_speech_id == parts_of_speech["verb"].id
    assert terms[1].phonics is None
    assert _count(db_session, Concept.id) == 1

    audit = db_session.execute(
        select(AuditLog).where(AuditLog.action == "admin:term:bulk_import")
    ).scalar_one()
    assert audit.details == {"count": 2, "failed": 2}


def test_bulk_add_terms_without_errors_omits_key(db_session, admin_user, languages, parts_of_speech):
    result = TermAdminService(db_session, admin_user).bulk_add_terms([_row(languages)])
    assert result.data == {"count": 1}


def test_parse_terms_csv():
    content = (
        "\ufefftext,meaning,partOfSpeech,phonics,domains\n"
        "omi,water,noun,ò-mi,Nature;Science\n"
        ",missing text,noun,,\n"
        "\n"
        "ina,fire,noun,,Nature|Energy\n"
    )

    rows, errors = parse_terms_csv(content, language_id=3)

    assert [r.text for r in rows] == ["omi", "ina"]
    assert rows[0].domains == ["Nature", "Science"]
    assert rows[0].phonics == "ò-mi"
    assert rows[1].domains == ["Nature", "Energy"]
    assert rows[1].phonics is None
    assert all(r.language_id == 3 for r in rows)
    assert errors == ["Line 3: text, meaning and partOfSpeech are required"]


def test_parse_terms_csv_header_problems():
    assert parse_terms_csv("", language_id=1) == ([], ["CSV file is empty"])

    rows, errors = parse_terms_csv("word,meaning\nomi,water\n", language_id=1)
    assert rows == []
    assert errors == ["CSV header is missing column(s): part_of_speech"]
