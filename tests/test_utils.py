"""Tests for string analysis and natural language query parsing."""
import hashlib
from datetime import timezone

import pytest

from string_analyzer.exceptions import InvalidTypeError
from string_analyzer.utils import (
    analyze_string,
    compute_sha256,
    count_words,
    parse_natural_language_query,
)


def test_id_is_sha256_of_utf8_value():
    record = analyze_string("héllo")
    expected = hashlib.sha256("héllo".encode("utf-8")).hexdigest()
    assert record.id == expected
    assert record.properties.sha256_hash == expected
    assert compute_sha256("héllo") == expected


def test_id_is_deterministic():
    assert analyze_string("same").id == analyze_string("same").id
    assert analyze_string("same").id != analyze_string("Same").id


def test_length_counts_code_points():
    assert analyze_string("héllo").properties.length == 5
    assert analyze_string("😀😀").properties.length == 2
    assert analyze_string("").properties.length == 0


@pytest.mark.parametrize("value,expected", [
    ("", 0),
    ("   ", 0),
    ("a b  c", 3),
    ("one", 1),
    ("\ttab\nnewline ", 2),
])
def test_word_count(value, expected):
    assert count_words(value) == expected
    assert analyze_string(value).properties.word_count == expected


@pytest.mark.parametrize("value,expected", [
    ("Racecar", True),
    ("race car", False),
    ("", True),
    ("level", True),
    ("ab", False),
    ("A man, a plan", False),
    ("!a!", True),
])
def test_palindrome(value, expected):
    assert analyze_string(value).properties.is_palindrome is expected


def test_character_frequency_and_unique_count():
    props = analyze_string("aab").properties
    assert props.character_frequency_map == {"a": 2, "b": 1}
    assert props.unique_characters == 2


def test_frequency_map_is_case_sensitive():
    props = analyze_string("Aa").properties
    assert props.character_frequency_map == {"A": 1, "a": 1}
    assert props.unique_characters == 2


def test_created_at_is_utc():
    record = analyze_string("x")
    assert record.created_at.tzinfo is not None
    assert record.created_at.utcoffset() == timezone.utc.utcoffset(None)


@pytest.mark.parametrize("value", [123, None, ["a"], b"bytes"])
def test_analyze_rejects_non_strings(value):
    with pytest.raises(InvalidTypeError):
        analyze_string(value)


def test_invalid_type_error_is_a_type_error():
    with pytest.raises(TypeError):
        analyze_string(1.5)


def test_parse_combined_query():
    parsed = parse_natural_language_query("find palindromic single word entries longer than 2")
    assert parsed == {
        "original": "find palindromic single word entries longer than 2",
        "parsed_filters": {"is_palindrome": True, "word_count": 1, "min_length": 2},
    }


@pytest.mark.parametrize("query", ["", None, 42])
def test_parse_returns_none_for_empty_or_non_string(query):
    assert parse_natural_language_query(query) is None


def test_parse_is_case_insensitive():
    parsed = parse_natural_language_query("PALINDROME strings SHORTER THAN 7")
    assert parsed["parsed_filters"] == {"is_palindrome": True, "max_length": 7}
    assert parsed["original"] == "PALINDROME strings SHORTER THAN 7"


@pytest.mark.parametrize("query", [
    "strings containing character z",
    "strings containing character 'z'",
    'strings containing character "Z"',
])
def test_parse_containing_character(query):
    parsed = parse_natural_language_query(query)
    assert parsed["parsed_filters"] == {"contains_character": "z"}


def test_parse_unrecognized_query_yields_no_filters():
    parsed = parse_natural_language_query("show me everything")
    assert parsed == {"original": "show me everything", "parsed_filters": {}}


def test_parse_does_not_understand_number_words():
    parsed = parse_natural_language_query("strings longer than five")
    assert parsed["parsed_filters"] == {}


def test_parse_both_bounds():
    parsed = parse_natural_language_query("longer than 10 and shorter than 3")
    assert parsed["parsed_filters"] == {"min_length": 10, "max_length": 3}
