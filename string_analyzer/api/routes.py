from fastapi import APIRouter, Depends, Query, status
from typing import Optional
import re
import logging

from string_analyzer.database import get_store
from string_analyzer.exceptions import (
    InvalidRequestError,
    StringAlreadyExistsError,
    StringNotFoundError,
)
from string_analyzer.filters import apply_filters, check_filter_conflicts, parse_filters
from string_analyzer.schemas import (
    InterpretedQuery,
    NaturalLanguageResponse,
    StringCreate,
    StringListResponse,
    StringRecord,
)
from string_analyzer.store import StringStore
from string_analyzer.utils import analyze_string, compute_sha256, parse_natural_language_query

router = APIRouter(prefix="/strings")
logger = logging.getLogger(__name__)

SHA256_HEX = re.compile(r"[a-f0-9]{64}")


def lookup_string(store: StringStore, string_value: str) -> Optional[StringRecord]:
    """Treat a 64-char hex segment as an id, anything else as the raw value."""
    if SHA256_HEX.fullmatch(string_value):
        return store.find_by_id(string_value)
    return store.find_by_value(string_value)


def register_string(store: StringStore, value: str) -> StringRecord:
    """Analyze and store `value`, raising StringAlreadyExistsError on a duplicate."""
    # Check and insert under one lock so concurrent duplicates cannot both land
    with store.write_lock:
        if store.find_by_value(value) or store.find_by_id(compute_sha256(value)):
            raise StringAlreadyExistsError()
        record = analyze_string(value)
        store.create(record)
    return record


@router.post("", response_model=StringRecord, status_code=status.HTTP_201_CREATED)
def create_string(string_data: StringCreate, store: StringStore = Depends(get_store)):
    """
    Analyze and store a string.
    Returns 409 if string already exists.
    """
    return register_string(store, string_data.value)


@router.get("", response_model=StringListResponse)
def get_all_strings(
    is_palindrome: Optional[str] = Query(None, description="Filter by palindrome (true/false)"),
    min_length: Optional[str] = Query(None, description="Minimum string length"),
    max_length: Optional[str] = Query(None, description="Maximum string length"),
    word_count: Optional[str] = Query(None, description="Exact word count"),
    contains_character: Optional[str] = Query(None, description="Single character the string must contain"),
    store: StringStore = Depends(get_store),
):
    """
    Get all strings with optional filtering.
    Contradictory bounds simply match nothing.
    """
    filters = parse_filters({
        "is_palindrome": is_palindrome,
        "min_length": min_length,
        "max_length": max_length,
        "word_count": word_count,
        "contains_character": contains_character,
    })

    data = apply_filters(store.all(), filters)

    return StringListResponse(
        data=data,
        count=len(data),
        filters_applied=filters.applied(),
    )


@router.get("/natural", response_model=NaturalLanguageResponse)
@router.get("/filter-by-natural-language", response_model=NaturalLanguageResponse)
def filter_by_natural_language(
    query: Optional[str] = Query(None, description="Natural language query"),
    store: StringStore = Depends(get_store),
):
    """
    Filter strings using natural language queries.
    Example: "palindromic single word strings longer than 2"
    """
    parsed = parse_natural_language_query(query)
    if parsed is None:
        raise InvalidRequestError("Unable to parse natural language query")

    filters = parse_filters(parsed["parsed_filters"])
    check_filter_conflicts(filters)

    data = apply_filters(store.all(), filters)
    logger.info(f"Natural query {query!r} interpreted as {parsed['parsed_filters']}")

    return NaturalLanguageResponse(
        data=data,
        count=len(data),
        interpreted_query=InterpretedQuery(**parsed),
    )


@router.get("/{string_value:path}", response_model=StringRecord)
def get_string(string_value: str, store: StringStore = Depends(get_store)):
    """
    Get analysis for a specific string, by value or by SHA-256 id.
    Returns 404 if string doesn't exist.
    """
    record = lookup_string(store, string_value)
    if not record:
        raise StringNotFoundError()
    return record


@router.delete("/{string_value:path}", status_code=status.HTTP_204_NO_CONTENT)
def delete_string(string_value: str, store: StringStore = Depends(get_store)):
    """
    Delete a string from the system, by value or by SHA-256 id.
    Returns 404 if string doesn't exist.
    """
    record = lookup_string(store, string_value)
    if not record or not store.delete_by_id(record.id):
        raise StringNotFoundError()
    return None
