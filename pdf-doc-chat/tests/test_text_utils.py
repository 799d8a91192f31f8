#!/usr/bin/env python3
"""
Tests for model-response parsing helpers.
"""
import pytest
from models.data_models import ExtractionParseError
from utils.text_utils import parse_page_response, strip_code_fences, truncate


@pytest.mark.parametrize(
    "raw,expected",
    [
        ('```json\n{"1": "a"}\n```', '{"1": "a"}'),
        ('```\n{"1": "a"}\n```', '{"1": "a"}'),
        ('  {"1": "a"}  ', '{"1": "a"}'),
        ("```json{\"1\": \"a\"}```", '{"1": "a"}'),
        (None, ""),
    ],
)
def test_strip_code_fences(raw, expected):
    assert strip_code_fences(raw) == expected


def test_parse_converts_keys_to_int():
    assert parse_page_response('{"3": "three", "4": "four"}') == {3: "three", 4: "four"}


def test_parse_ignores_non_numeric_keys_and_nulls():
    assert parse_page_response('{"1": "one", "note": "x", "2": null}') == {1: "one"}


def test_parse_stringifies_structured_values():
    assert parse_page_response('{"1": ["a", "b"]}') == {1: '["a", "b"]'}


def test_parse_keeps_blank_page_text():
    assert parse_page_response('{"5": ""}') == {5: ""}


def test_parse_fixes_mojibake():
    assert parse_page_response('{"1": "cafÃ©"}') == {1: "café"}


@pytest.mark.parametrize("raw", ["", "```json\n```", "not json", "[1, 2]", "42", "{}"])
def test_parse_rejects_unusable_responses(raw):
    with pytest.raises(ExtractionParseError):
        parse_page_response(raw)


def test_truncate_marks_cut_documents():
    assert truncate("abcdef", 3).startswith("abc\n\n[... document truncated")
    assert truncate("abc", 3) == "abc"
    assert truncate("abc", 0) == "abc"
