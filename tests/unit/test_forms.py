"""
Unit tests for form parsing helpers
"""
from pydantic import ValidationError

from awadiko.core.forms import field_errors, form_value, parse_indexed_rows, parse_json_list
from awadiko.schemas.term import TermInput


def test_parse_json_list():
    assert parse_json_list('["Tech", "Science"]') == ["Tech", "Science"]
    assert parse_json_list(["Law"]) == ["Law"]
    assert parse_json_list("") == []
    assert parse_json_list(None) == []
    assert parse_json_list("not json") == []
    assert parse_json_list('{"a": 1}') == []


def test_form_value():
    form = {"gloss": "water", "count": 3}
    assert form_value(form, "gloss") == "water"
    assert form_value(form, "count") == "3"
    assert form_value(form, "missing") is None


def test_parse_indexed_rows_orders_by_index():
    form = {
        "term_id": "4",
        "suggestions[1].type": "ROOT",
        "suggestions[1].text": "second",
        "suggestions[0].type": "POPULAR",
        "suggestions[0].text": "first",
        "suggestions[3].text": "fourth",
        "other[0].text": "ignored",
    }
    rows = parse_indexed_rows(form, "suggestions")
    assert rows == [
        (0, {"type": "POPULAR", "text": "first"}),
        (1, {"type": "ROOT", "text": "second"}),
        (3, {"text": "fourth"}),
    ]


def test_field_errors_uses_validator_messages():
    try:
        TermInput(text="", meaning=" ", language_id="0", part_of_speech_id=None)
    except ValidationError as e:
        errors = field_errors(e)
    assert errors["text"] == ["Word text is required"]
    assert errors["meaning"] == ["Meaning is required"]
    assert errors["language_id"] == ["Language is required"]
    assert errors["part_of_speech_id"] == ["Part of Speech is required"]
