"""
Integration tests for public dictionary endpoints and the language lookup
"""
from awadiko.models.concept import Concept
from awadiko.models.user import UserProfile, ProfileTargetLanguage


def test_english_language_lookup(client, languages):
    r = client.get("/api/language/english")
    assert r.status_code == 200
    assert r.json() == {"id": languages["eng"].id, "name": "English"}


def test_english_language_missing(client, db_session):
    r = client.get("/api/language/english")
    assert r.status_code == 404
    assert r.json() == {"error": "English language not found"}


def test_dictionary_terms_and_alphabets(client, db_session, languages, parts_of_speech, term_factory):
    water = term_factory("water", "clear liquid", languages["eng"], parts_of_speech["noun"])
    concept = db_session.get(Concept, water.concept_id)
    term_factory("omi", "clear liquid", languages["yor"], parts_of_speech["noun"], concept=concept)
    term_factory("apple", "a fruit", languages["eng"], parts_of_speech["noun"])

    r = client.get(
        "/dictionary/terms",
        params={"language_id": languages["eng"].id, "community_language_id": languages["yor"].id},
    )
    body = r.json()
    assert body["success"] is True
    assert [(t["text"], t["translation"]) for t in body["data"]["terms"]] == [("apple", None), ("water", "omi")]
    assert body["data"]["has_more"] is False

    letters = client.get("/dictionary/alphabets", params={"language_id": languages["eng"].id}).json()
    assert letters["data"] == ["A", "W"]


def test_submit_request_requires_session(client, languages, parts_of_speech):
    r = client.post("/dictionary/requests", data={"word": "computer"})
    assert r.json() == {
        "success": False,
        "data": None,
        "error": "Unauthorized: Please sign in to submit a request",
        "message": None,
    }


def test_submit_request_missing_fields(client, explorer_user, authenticated_headers, languages):
    r = client.post("/dictionary/requests", data={"word": "computer"}, headers=authenticated_headers(explorer_user))
    body = r.json()
    assert body["success"] is False
    assert body["message"] == "Missing Fields. Failed to submit request."
    assert set(body["error"]) == {"meaning", "source_language_id", "target_language_id", "part_of_speech_id"}


def test_request_profile(client, db_session, explorer_user, authenticated_headers, languages):
    headers = authenticated_headers(explorer_user)
    assert client.get("/dictionary/profile", headers=headers).status_code == 404

    profile = UserProfile(user_id=explorer_user.id, ui_language_id=languages["eng"].id)
    profile.target_languages.append(ProfileTargetLanguage(language_id=languages["yor"].id))
    db_session.add(profile)
    db_session.commit()

    r = client.get("/dictionary/profile", headers=headers)
    assert r.status_code == 200
    assert r.json()["data"]["target_languages"][0]["name"] == "Yoruba"
