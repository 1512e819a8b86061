"""
Integration tests for the admin Concept, Domain and Term endpoints
"""
from sqlalchemy import select, func

from awadiko.models.domain import Domain, DomainsOnTerms
from awadiko.models.term import Term


def test_concept_crud(client, admin_user, authenticated_headers):
    headers = authenticated_headers(admin_user)

    created = client.post("/admin/concepts", data={"gloss": "water"}, headers=headers).json()
    assert created["success"] is True
    concept_id = created["data"]["id"]

    updated = client.put(f"/admin/concepts/{concept_id}", data={"gloss": "fresh water"}, headers=headers).json()
    assert updated["data"]["gloss"] == "fresh water"

    listing = client.get("/admin/concepts", params={"search": "fresh"}, headers=headers).json()
    assert listing["data"]["total"] == 1
    assert listing["data"]["items"][0]["term_count"] == 0

    deleted = client.delete(f"/admin/concepts/{concept_id}", headers=headers).json()
    assert deleted == {"success": True, "data": None, "error": None, "message": None}


def test_concept_validation_errors_are_field_maps(client, admin_user, authenticated_headers):
    r = client.post("/admin/concepts", data={"gloss": ""}, headers=authenticated_headers(admin_user))
    assert r.status_code == 200
    assert r.json()["error"] == {"gloss": ["Gloss is required"]}


def test_admin_actions_return_guard_failures(client, juror_user, authenticated_headers):
    forbidden = client.post("/admin/domains", data={"name": "Law"}, headers=authenticated_headers(juror_user))
    assert forbidden.status_code == 200
    assert forbidden.json() == {
        "success": False,
        "data": None,
        "error": "Forbidden: Missing permission 'manage:dictionary'",
        "message": None,
    }

    anonymous = client.get("/admin/terms")
    assert anonymous.json()["error"] == "Unauthorized: No user session"


def test_domain_crud(client, admin_user, authenticated_headers):
    headers = authenticated_headers(admin_user)

    law = client.post("/admin/domains", data={"name": "Law"}, headers=headers).json()["data"]
    duplicate = client.post("/admin/domains", data={"name": "LAW"}, headers=headers).json()
    assert duplicate["error"] == {"name": ["Domain with this name already exists."]}

    renamed = client.put(f"/admin/domains/{law['id']}", data={"name": "Legal"}, headers=headers).json()
    assert renamed["data"]["name"] == "Legal"

    assert [d["name"] for d in client.get("/admin/domains", headers=headers).json()["data"]["items"]] == ["Legal"]
    assert client.delete(f"/admin/domains/{law['id']}", headers=headers).json()["success"] is True


def test_term_create_with_stringified_domains(
    client, db_session, admin_user, authenticated_headers, languages, parts_of_speech
):
    headers = authenticated_headers(admin_user)
    form = {
        "text": "omi",
        "meaning": "water",
        "language_id": str(languages["yor"].id),
        "part_of_speech_id": str(parts_of_speech["noun"].id),
        "domains": '["Tech","Science"]',
    }

    created = client.post("/admin/terms", data=form, headers=headers).json()
    assert created["success"] is True
    assert db_session.execute(select(func.count(Domain.id))).scalar_one() == 2
    assert db_session.execute(select(func.count()).select_from(DomainsOnTerms)).scalar_one() == 2

    duplicate = client.post("/admin/terms", data={**form, "text": "OMI"}, headers=headers).json()
    assert duplicate["error"] == {"text": ["Term with this text and meaning already exists in this language."]}

    count = client.get("/admin/terms/count", headers=headers).json()
    assert count["data"] == {"count": 1}

    term_id = created["data"]["id"]
    updated = client.put(f"/admin/terms/{term_id}", data={**form, "domains": '["Law"]'}, headers=headers).json()
    assert updated["success"] is True
    listing = client.get("/admin/terms", headers=headers).json()
    assert [d["name"] for d in listing["data"]["items"][0]["domains"]] == ["Law"]

    assert client.delete(f"/admin/terms/{term_id}", headers=headers).json()["success"] is True


def test_bulk_import_json(client, db_session, admin_user, authenticated_headers, languages, parts_of_speech):
    rows = [
        {"text": "omi", "meaning": "water", "part_of_speech": "Noun", "language_id": languages["yor"].id},
        {"text": "ina", "meaning": "fire", "part_of_speech": "pronoun", "language_id": languages["yor"].id},
    ]

    result = client.post("/admin/terms/bulk", json=rows, headers=authenticated_headers(admin_user)).json()

    assert result["success"] is True
    assert result["data"] == {"count": 1, "errors": ['Row "ina": Unknown part of speech "pronoun"']}


def test_bulk_import_csv_upload(client, db_session, admin_user, authenticated_headers, languages, parts_of_speech):
    content = (
        "text,meaning,partOfSpeech,phonics,domains\n"
        "omi,water,noun,,Nature\n"
        "ina,,noun,,\n"
        "sure,run,verb,,Sport|Nature\n"
    )

    r = client.post(
        "/admin/terms/upload",
        files={"file": ("terms.csv", content.encode("utf-8"), "text/csv")},
        data={"language_id": str(languages["yor"].id)},
        headers=authenticated_headers(admin_user),
    )

    body = r.json()
    assert body["success"] is True
    assert body["data"]["count"] == 2
    assert body["data"]["errors"] == ["Line 3: text, meaning and partOfSpeech are required"]
    texts = db_session.execute(select(Term.text).order_by(Term.text)).scalars().all()
    assert texts == ["omi", "sure"]


def test_csv_upload_must_be_utf8(client, admin_user, authenticated_headers, languages):
    r = client.post(
        "/admin/terms/upload",
        files={"file": ("terms.csv", "text\nçà".encode("latin-1"), "text/csv")},
        data={"language_id": str(languages["yor"].id)},
        headers=authenticated_headers(admin_user),
    )
    assert r.json()["error"] == "CSV file must be UTF-8 encoded"
