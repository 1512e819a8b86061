"""
Unit tests for dictionary reads and translation request submission
"""
import json

from sqlalchemy import select, func

from awadiko.models.concept import Concept
from awadiko.models.domain import Domain, DomainsOnRequests
from awadiko.models.translation_request import TranslationRequest, RequestStatus
from awadiko.models.user import UserProfile, ProfileTargetLanguage
from awadiko.services.dictionary_service import DictionaryService
from awadiko.services.domain_admin_service import DomainAdminService


def _request_form(languages, parts_of_speech, **overrides):
    form = {
        "word": "computer",
        "meaning": "an electronic machine",
        "source_language_id": str(languages["eng"].id),
        "target_language_id": str(languages["yor"].id),
        "part_of_speech_id": str(parts_of_speech["noun"].id),
        "domains": '["Tech", "Science"]',
    }
    form.update(overrides)
    return form


def test_submit_request_requires_user(db_session, languages, parts_of_speech):
    result = DictionaryService(db_session, None).submit_request(_request_form(languages, parts_of_speech))

    assert result.success is False
    assert result.error == "Unauthorized: Please sign in to submit a request"


def test_submit_request_creates_request_with_domains(
    db_session, explorer_user, languages, parts_of_speech, fake_cache
):
    db_session.add(Domain(name="tech"))
    db_session.commit()
    service = DictionaryService(db_session, explorer_user, fake_cache)

    result = service.submit_request(_request_form(languages, parts_of_speech))

    assert result.success is True
    assert result.message == "Request submitted successfully! It will be reviewed by an admin."
    request = db_session.get(TranslationRequest, result.data["id"])
    assert request.status == RequestStatus.PENDING
    assert request.user_id == explorer_user.id
    assert sorted(link.domain.name for link in request.domains) == ["Science", "tech"]
    assert fake_cache.invalidated == ["page:/dictionary:"]


def test_submit_request_validation(db_session, explorer_user, languages, parts_of_speech):
    result = DictionaryService(db_session, explorer_user).submit_request(
        _request_form(languages, parts_of_speech, word=" ", target_language_id="abc")
    )

    assert result.success is False
    assert result.message == "Missing Fields. Failed to submit request."
    assert result.error == {
        "word": ["Word is required"],
        "target_language_id": ["Target language is required"],
    }


def test_submit_request_rejects_duplicate_request(db_session, explorer_user, languages, parts_of_speech):
    service = DictionaryService(db_session, explorer_user)
    service.submit_request(_request_form(languages, parts_of_speech))

    result = service.submit_request(_request_form(languages, parts_of_speech, word="Computer", domains="[]"))

    assert result.success is False
    assert result.error == {"word": ["This word already has a pending translation request."]}
    assert result.message == "This word with the same meaning has already been requested. Please be patient."
    assert db_session.execute(select(func.count(TranslationRequest.id))).scalar_one() == 1


def test_submit_request_rejects_existing_term(
    db_session, explorer_user, languages, parts_of_speech, term_factory
):
    term_factory("Computer", "An electronic machine", languages["eng"], parts_of_speech["noun"])

    result = DictionaryService(db_session, explorer_user).submit_request(_request_form(languages, parts_of_speech))

    assert result.success is False
    assert result.error == {"word": ["This word already exists in the dictionary."]}


def test_get_dictionary_terms_with_translation(db_session, languages, parts_of_speech, term_factory, fake_cache):
    water = term_factory("water", "clear liquid", languages["eng"], parts_of_speech["noun"])
    concept = db_session.get(Concept, water.concept_id)
    term_factory("omi", "clear liquid", languages["yor"], parts_of_speech["noun"], concept=concept)
    term_factory("apple", "a fruit", languages["eng"], parts_of_speech["noun"])
    term_factory("walk", "move on foot", languages["eng"], parts_of_speech["verb"])
    service = DictionaryService(db_session, None, fake_cache)

    result = service.get_dictionary_terms(languages["eng"].id, languages["yor"].id, take=2)

    assert result.success is True
    assert [t["text"] for t in result.data["terms"]] == ["apple", "walk"]
    assert result.data["has_more"] is True
    assert result.data["terms"][0]["translation"] is None
    assert result.data["terms"][1]["part_of_speech"] == "Verb"

    page = service.get_dictionary_terms(languages["eng"].id, languages["yor"].id, alphabet="w")
    assert [t["text"] for t in page.data["terms"]] == ["walk", "water"]
    assert page.data["terms"][1]["translation"] == "omi"
    assert page.data["has_more"] is False

    searched = service.get_dictionary_terms(languages["eng"].id, languages["yor"].id, search_query="FRUIT")
    assert [t["text"] for t in searched.data["terms"]] == ["apple"]


def test_get_dictionary_terms_served_from_cache(db_session, languages, parts_of_speech, term_factory, fake_cache):
    term_factory("apple", "a fruit", languages["eng"], parts_of_speech["noun"])
    service = DictionaryService(db_session, None, fake_cache)

    first = service.get_dictionary_terms(languages["eng"].id, languages["yor"].id)
    assert len(fake_cache.store) == 1
    cached = json.loads(next(iter(fake_cache.store.values())))
    assert cached == first.data

    fake_cache.store[next(iter(fake_cache.store))] = json.dumps({"terms": [], "has_more": False})
    second = service.get_dictionary_terms(languages["eng"].id, languages["yor"].id)
    assert second.data == {"terms": [], "has_more": False}


def test_request_submission_invalidates_cached_pages(
    db_session, explorer_user, languages, parts_of_speech, fake_cache
):
    service = DictionaryService(db_session, explorer_user, fake_cache)
    service.get_dictionary_terms(languages["eng"].id, languages["yor"].id)
    assert fake_cache.store

    service.submit_request(_request_form(languages, parts_of_speech))

    assert fake_cache.store == {}


def test_domain_rename_invalidates_cached_dictionary_pages(
    db_session, admin_user, languages, parts_of_speech, term_factory, fake_cache
):
    domain = Domain(name="Tech")
    db_session.add(domain)
    db_session.commit()
    term_factory("computer", "machine", languages["eng"], parts_of_speech["noun"], domains=[domain])
    reader = DictionaryService(db_session, None, fake_cache)
    first = reader.get_dictionary_terms(languages["eng"].id, languages["yor"].id)
    assert first.data["terms"][0]["domains"] == ["Tech"]

    DomainAdminService(db_session, admin_user, fake_cache).update_domain(domain.id, {"name": "Technology"})
    second = reader.get_dictionary_terms(languages["eng"].id, languages["yor"].id)

    assert second.data["terms"][0]["domains"] == ["Technology"]


def test_search_and_alphabet_treat_wildcards_literally(db_session, languages, parts_of_speech, term_factory):
    term_factory("water", "liquid", languages["eng"], parts_of_speech["noun"])
    term_factory("100%", "all of it", languages["eng"], parts_of_speech["noun"])
    service = DictionaryService(db_session)

    by_alphabet = service.get_dictionary_terms(languages["eng"].id, languages["yor"].id, alphabet="_")
    by_search = service.get_dictionary_terms(languages["eng"].id, languages["yor"].id, search_query="%")

    assert by_alphabet.data["terms"] == []
    assert [t["text"] for t in by_search.data["terms"]] == ["100%"]


def test_get_available_alphabets(db_session, languages, parts_of_speech, term_factory):
    term_factory("water", "liquid", languages["eng"], parts_of_speech["noun"])
    term_factory("apple", "fruit", languages["eng"], parts_of_speech["noun"])
    term_factory("Wind", "moving air", languages["eng"], parts_of_speech["noun"])
    term_factory("omi", "liquid", languages["yor"], parts_of_speech["noun"])

    result = DictionaryService(db_session).get_available_alphabets(languages["eng"].id)

    assert result.data == ["A", "W"]


def test_get_user_profile_for_request(db_session, explorer_user, languages):
    profile = UserProfile(user_id=explorer_user.id, ui_language_id=languages["eng"].id)
    profile.target_languages.append(ProfileTargetLanguage(language_id=languages["yor"].id))
    db_session.add(profile)
    db_session.commit()
    service = DictionaryService(db_session, explorer_user)

    data = service.get_user_profile_for_request(explorer_user.id)

    assert data["user_id"] == explorer_user.id
    assert data["ui_language"]["code"] == "eng"
    assert [lang["code"] for lang in data["target_languages"]] == ["yor"]
    assert service.get_user_profile_for_request(999) is None


def test_request_domains_are_join_rows(db_session, explorer_user, languages, parts_of_speech):
    DictionaryService(db_session, explorer_user).submit_request(
        _request_form(languages, parts_of_speech, domains='["Tech","Tech"," "]')
    )
    assert db_session.execute(select(func.count()).select_from(DomainsOnRequests)).scalar_one() == 1
