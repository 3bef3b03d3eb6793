"""Tests for recovering JSON values from noisy model output."""
import json

import pytest

from foresight.services.extraction import (
    INVALID_JSON,
    NO_CLOSER,
    NO_STRUCTURE,
    extract_json,
    strip_fences,
)


@pytest.mark.parametrize(
    "payload",
    [
        '{"category": "Retail", "competitors": ["A", "B", "C"]}',
        '[{"label": "Yes", "icon": "check"}, {"label": "No", "icon": "close"}]',
        '{"nested": {"list": [1, 2, {"deep": [true, null]}]}}',
        "[]",
        "{}",
    ],
)
def test_clean_json_extracts_identically(payload):
    result = extract_json(payload)
    assert result.ok
    assert result.value == json.loads(payload)


def test_fenced_payload_with_language_tag():
    text = '```json\n{"a": 1, "b": [1, 2]}\n```'
    result = extract_json(text)
    assert result.ok
    assert result.value == {"a": 1, "b": [1, 2]}


def test_leading_prose_and_fence():
    text = 'Sure! Here is the analysis you asked for:\n```\n[{"id": "q1"}]\n```\nLet me know if you need more.'
    result = extract_json(text)
    assert result.value == [{"id": "q1"}]
    assert result.kind == "array"


def test_array_chosen_when_bracket_comes_first():
    result = extract_json('[{"label": "A"}]')
    assert result.kind == "array"


def test_object_chosen_when_brace_comes_first():
    result = extract_json('Result {"items": [1, 2, 3]}')
    assert result.kind == "object"
    assert result.value == {"items": [1, 2, 3]}


def test_no_structure_is_reported():
    result = extract_json("I could not find anything about that company.")
    assert not result.ok
    assert result.value is None
    assert result.reason == NO_STRUCTURE


@pytest.mark.parametrize("text", ["", None, "   ", "```\n```"])
def test_empty_input_is_a_failure(text):
    assert extract_json(text).reason == NO_STRUCTURE


def test_closing_token_before_opener():
    result = extract_json('} oops {"a": 1')
    assert result.reason == NO_CLOSER


@pytest.mark.parametrize(
    "text",
    [
        '{"a": 1,}',
        '[{"label": "A"}, {"label": "B"},]',
        '{"a": [1, 2}',
        '{"summary": "truncated...',
        "{'single': 'quotes'}",
    ],
)
def test_invalid_json_fails_without_raising(text):
    result = extract_json(text)
    assert not result.ok
    assert result.value is None
    assert result.reason in (INVALID_JSON, NO_CLOSER)


def test_trailing_same_kind_fragment_breaks_default_heuristic():
    text = '```json\n{"a":1}\n``` extra trailing note {"b":2}'
    result = extract_json(text)
    assert not result.ok
    assert result.reason == INVALID_JSON


def test_balanced_scan_stops_at_first_complete_value():
    text = '```json\n{"a":1}\n``` extra trailing note {"b":2}'
    result = extract_json(text, balanced=True)
    assert result.ok
    assert result.value == {"a": 1}


def test_balanced_scan_ignores_brackets_inside_strings():
    text = 'Answer: {"text": "uses } and ] inside \\" quotes", "n": [1]} trailing ]'
    result = extract_json(text, balanced=True)
    assert result.value == {"text": 'uses } and ] inside " quotes', "n": [1]}


def test_balanced_scan_reports_unterminated_value():
    result = extract_json('{"a": [1, 2', balanced=True)
    assert result.reason == NO_CLOSER


def test_trailing_fragment_of_other_kind_is_tolerated():
    text = '{"a": 1}\nSee also [1]'
    assert extract_json(text).value == {"a": 1}


def test_strip_fences_removes_markers_only():
    assert strip_fences('```json\n{"a": 1}\n```') == '{"a": 1}'
    assert strip_fences("  plain text  ") == "plain text"


def test_expect_passes_matching_kind_through():
    result = extract_json('[{"label": "Yes", "icon": "check"}]').expect("array")
    assert result.ok
    assert result.value == [{"label": "Yes", "icon": "check"}]


def test_expect_turns_other_kind_into_failure():
    result = extract_json('{"options": []}').expect("array")
    assert not result.ok
    assert result.value is None
    assert result.reason == "expected a JSON array, got object"


def test_expect_keeps_original_failure_reason():
    assert extract_json("no json here").expect("object").reason == NO_STRUCTURE


def test_package_root_does_not_expose_the_app():
    import foresight

    assert not hasattr(foresight, "app")
