"""Filter engine: validate raw filter values and apply them to records.

Filters combine with logical AND. Values coming from query strings arrive as
text and are converted here, so ``apply_filters`` only ever compares typed
values.
"""
import logging
import re
from typing import Any, Iterable, List, Mapping, Union

from string_analyzer.exceptions import ConflictingFiltersError, FilterValidationError
from string_analyzer.schemas import FilterSet, StringRecord

logger = logging.getLogger(__name__)

FILTER_NAMES = ("is_palindrome", "min_length", "max_length", "word_count", "contains_character")
INTEGER_TEXT = re.compile(r"[+-]?\d+", re.ASCII)


def _to_bool(raw: Any) -> bool:
    # Only the literal "true" counts when the value comes in as text
    if isinstance(raw, bool):
        return raw
    return raw == "true"


def _to_int(name: str, raw: Any) -> int:
    if isinstance(raw, bool):
        raise FilterValidationError(name, f"{name} must be integer")
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float) and raw.is_integer():
        return int(raw)
    if isinstance(raw, str):
        text = raw.strip()
        if INTEGER_TEXT.fullmatch(text):
            return int(text)
    raise FilterValidationError(name, f"{name} must be integer")


def _to_character(name: str, raw: Any) -> str:
    character = str(raw)
    if len(character) != 1:
        raise FilterValidationError(name, f"{name} must be a single character")
    return character


def parse_filters(raw: Mapping[str, Any]) -> FilterSet:
    """Validate a mapping of raw filter values into a FilterSet.

    Keys that are not recognized filters, and keys whose value is None, are
    ignored. Raises FilterValidationError naming the first bad filter.
    """
    values = {name: raw[name] for name in FILTER_NAMES if raw.get(name) is not None}

    parsed = {}
    if "is_palindrome" in values:
        parsed["is_palindrome"] = _to_bool(values["is_palindrome"])
    for name in ("min_length", "max_length", "word_count"):
        if name in values:
            parsed[name] = _to_int(name, values[name])
    if "contains_character" in values:
        parsed["contains_character"] = _to_character("contains_character", values["contains_character"])

    return FilterSet(**parsed)


def check_filter_conflicts(filters: FilterSet) -> None:
    """Reject filter sets whose length bounds cannot both hold"""
    if (
        filters.min_length is not None
        and filters.max_length is not None
        and filters.min_length > filters.max_length
    ):
        raise ConflictingFiltersError(
            f"Parsed filters conflict (min_length {filters.min_length} > max_length {filters.max_length})"
        )


def _matches(record: StringRecord, filters: FilterSet) -> bool:
    props = record.properties

    if filters.is_palindrome is not None and props.is_palindrome != filters.is_palindrome:
        return False
    if filters.min_length is not None and props.length < filters.min_length:
        return False
    if filters.max_length is not None and props.length > filters.max_length:
        return False
    if filters.word_count is not None and props.word_count != filters.word_count:
        return False
    if (
        filters.contains_character is not None
        and filters.contains_character not in props.character_frequency_map
    ):
        return False
    return True


def apply_filters(
    records: Iterable[StringRecord],
    filters: Union[FilterSet, Mapping[str, Any]],
) -> List[StringRecord]:
    """Return the records matching every filter, in their original order"""
    if not isinstance(filters, FilterSet):
        filters = parse_filters(filters)

    result = [record for record in records if _matches(record, filters)]
    logger.debug(f"Filters {filters.applied()} matched {len(result)} records")
    return result
