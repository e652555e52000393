# tests/test_json_extract.py
import pytest

from justyou.core.errors import ExtractionError
from justyou.services.json_extract import extract_json_array, extract_json_object


def test_object_wrapped_in_prose():
    text = 'Sure! Here is your quiz:\n{"title": "T", "questions": []}\nGood luck!'
    assert extract_json_object(text) == {"title": "T", "questions": []}


def test_object_inside_markdown_fence():
    text = '```json\n{\n  "title": "Fenced",\n  "questions": [{"id": "q1"}]\n}\n```'
    data = extract_json_object(text)
    assert data["title"] == "Fenced"
    assert data["questions"][0]["id"] == "q1"


def test_array_wrapped_in_prose():
    text = 'Grades below.\n[{"questionId": "q1", "points": 5}]\nThat is all.'
    assert extract_json_array(text) == [{"questionId": "q1", "points": 5}]


def test_no_json_span():
    with pytest.raises(ExtractionError) as exc_info:
        extract_json_object("I cannot create a quiz from these notes.")
    assert exc_info.value.raw == "I cannot create a quiz from these notes."


def test_invalid_json_span():
    with pytest.raises(ExtractionError):
        extract_json_object("{title: 'not json'}")


def test_greedy_match_spans_two_objects():
    # first "{" to last "}": two objects in one reply do not parse
    with pytest.raises(ExtractionError):
        extract_json_object('{"a": 1} and also {"b": 2}')


def test_array_expected_but_object_found():
    with pytest.raises(ExtractionError):
        extract_json_array('{"results": {"x": 1}}')


def test_empty_text():
    with pytest.raises(ExtractionError):
        extract_json_array("")
