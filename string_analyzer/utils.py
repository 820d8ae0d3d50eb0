import hashlib
import re
from collections import Counter
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from string_analyzer.exceptions import InvalidTypeError
from string_analyzer.schemas import StringProperties, StringRecord

LONGER_THAN = re.compile(r"longer than (\d+)")
SHORTER_THAN = re.compile(r"shorter than (\d+)")
CONTAINING_CHARACTER = re.compile(r"containing character ['\"]?([a-z])['\"]?")


def compute_sha256(text: str) -> str:
    """Compute SHA-256 hash of a string"""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def is_palindrome(text: str) -> bool:
    """Check if string is palindrome (case-insensitive, spaces and punctuation count)"""
    lowered = text.lower()
    return lowered == lowered[::-1]


def count_unique_characters(text: str) -> int:
    """Count distinct characters in string"""
    return len(set(text))


def count_words(text: str) -> int:
    """Count words separated by whitespace"""
    return len(text.split())


def get_character_frequency(text: str) -> Dict[str, int]:
    """Get frequency map of each character"""
    return dict(Counter(text))


def analyze_string(value: str) -> StringRecord:
    """Analyze a string and return a record with all computed properties"""
    if not isinstance(value, str):
        raise InvalidTypeError()

    sha256_hash = compute_sha256(value)

    return StringRecord(
        id=sha256_hash,
        value=value,
        properties=StringProperties(
            length=len(value),
            is_palindrome=is_palindrome(value),
            unique_characters=count_unique_characters(value),
            word_count=count_words(value),
            sha256_hash=sha256_hash,
            character_frequency_map=get_character_frequency(value),
        ),
        created_at=datetime.now(timezone.utc),
    )


def parse_natural_language_query(query: str) -> Optional[Dict[str, Any]]:
    """
    Parse natural language query into filter parameters
    Examples:
    - "all single word palindromic strings" -> {word_count: 1, is_palindrome: true}
    - "strings longer than 10 characters" -> {min_length: 10}
    - "strings containing character 'z'" -> {contains_character: "z"}

    Returns None when the query is empty or not a string.
    """
    if not query or not isinstance(query, str):
        return None

    text = query.lower()
    filters = {}

    if "palindrome" in text or "palindromic" in text:
        filters["is_palindrome"] = True

    if "single word" in text:
        filters["word_count"] = 1

    min_match = LONGER_THAN.search(text)
    if min_match:
        filters["min_length"] = int(min_match.group(1))

    max_match = SHORTER_THAN.search(text)
    if max_match:
        filters["max_length"] = int(max_match.group(1))

    char_match = CONTAINING_CHARACTER.search(text)
    if char_match:
        filters["contains_character"] = char_match.group(1)

    return {
        "original": query,
        "parsed_filters": filters,
    }
