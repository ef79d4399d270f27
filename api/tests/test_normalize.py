import json

import pytest

from burmafoodie.services.normalize import (
    normalize_model_text,
    parse_model_json,
    remove_trailing_commas,
    strip_code_fence,
)


def test_fenced_reply_with_trailing_comma_matches_clean_json():
    raw = '```json\n{"dishName":"Mohinga","ingredients":[],"instructions":[],"calories":"300 kcal",}\n```'
    clean = '{"dishName":"Mohinga","ingredients":[],"instructions":[],"calories":"300 kcal"}'

    assert parse_model_json(raw) == json.loads(clean)
    assert parse_model_json(raw) == {
        "dishName": "Mohinga",
        "ingredients": [],
        "instructions": [],
        "calories": "300 kcal",
    }


def test_fence_without_language_tag_is_stripped():
    assert strip_code_fence('```\n{"text": "hi"}\n```') == '{"text": "hi"}'


def test_unfenced_text_is_left_alone():
    assert strip_code_fence('{"text": "hi"}') == '{"text": "hi"}'


def test_only_an_outer_fence_is_stripped():
    raw = 'Here you go:\n```json\n{"text": "hi"}\n```'
    assert normalize_model_text(raw) == raw
    with pytest.raises(ValueError):
        parse_model_json(raw)


def test_trailing_commas_before_closing_bracket_and_brace():
    assert remove_trailing_commas('{"a": [1, 2, ], "b": {"c": 1,\n}, }') == '{"a": [1, 2], "b": {"c": 1}}'


def test_commas_between_items_are_kept():
    text = '{"a": 1, "b": [1, 2]}'
    assert remove_trailing_commas(text) == text


def test_surrounding_whitespace_is_trimmed():
    assert parse_model_json('  \n {"text": "hi"} \n') == {"text": "hi"}


@pytest.mark.parametrize("raw", ["", "   ", "\n\n", None])
def test_empty_reply_raises_value_error(raw):
    with pytest.raises(ValueError, match="Empty model reply"):
        parse_model_json(raw)


def test_single_quotes_are_not_repaired():
    with pytest.raises(json.JSONDecodeError):
        parse_model_json("{'dishName': 'Mohinga'}")


def test_valid_reply_with_comma_bracket_text_is_unchanged():
    reply = {"responseType": "greeting", "text": "Try [salt, ] or {a, }"}
    assert parse_model_json(json.dumps(reply)) == reply
    assert parse_model_json("```json\n" + json.dumps(reply) + "\n```") == reply
