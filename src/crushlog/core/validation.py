"""Structural validation of persisted crush records.

The checks here decide whether a record read from (or about to be written to)
storage is trustworthy. They look at shape, types and ranges only; content
safety is the job of :mod:`crushlog.core.sanitize`.

Every predicate is total: malformed input evaluates to ``False``, never raises.
"""

from collections.abc import Callable, Iterable, Mapping
from datetime import datetime
from typing import Any

from crushlog.config import (
    MAX_ACTION_DESCRIPTION_LENGTH,
    MAX_ACTION_TITLE_LENGTH,
    MAX_DESCRIPTION_LENGTH,
    MAX_DIARY_DESCRIPTION_LENGTH,
    MAX_DIARY_TITLE_LENGTH,
    MAX_FEELINGS,
    MAX_MISTAKES,
    MAX_NAME_LENGTH,
    MAX_TRAIT_TEXT_LENGTH,
    MIN_FEELINGS,
    STATUSES,
)


def _is_number(value: object) -> bool:
    # JSON true/false load as bool, which is an int subclass.
    return isinstance(value, int | float) and not isinstance(value, bool)


def _is_text(value: object, max_length: int) -> bool:
    """Non-empty string no longer than max_length."""
    return isinstance(value, str) and 0 < len(value) <= max_length


def _is_optional_text(value: object, max_length: int) -> bool:
    """Missing/empty, or a string no longer than max_length."""
    if not value:
        return True
    return isinstance(value, str) and len(value) <= max_length


def _has_id(entry: Mapping[str, Any]) -> bool:
    entry_id = entry.get("id")
    return bool(entry_id) and (isinstance(entry_id, str) or _is_number(entry_id))


def is_valid_timestamp(value: object) -> bool:
    """Check that value is a parseable ISO-8601 timestamp string."""
    if not isinstance(value, str) or not value:
        return False
    try:
        datetime.fromisoformat(value)
    except ValueError:
        return False
    return True


def is_valid_action(entry: object) -> bool:
    """Check a single pros/cons entry."""
    if not isinstance(entry, Mapping):
        return False
    return (
        _has_id(entry)
        and _is_text(entry.get("title"), MAX_ACTION_TITLE_LENGTH)
        and _is_optional_text(entry.get("description"), MAX_ACTION_DESCRIPTION_LENGTH)
    )


def is_valid_trait(entry: object) -> bool:
    """Check a single quality/defect entry."""
    if not isinstance(entry, Mapping):
        return False
    return _has_id(entry) and _is_text(entry.get("text"), MAX_TRAIT_TEXT_LENGTH)


def is_valid_diary_entry(entry: object) -> bool:
    """Check a single diary entry."""
    if not isinstance(entry, Mapping):
        return False
    return (
        _has_id(entry)
        and _is_text(entry.get("title"), MAX_DIARY_TITLE_LENGTH)
        and _is_optional_text(entry.get("description"), MAX_DIARY_DESCRIPTION_LENGTH)
        and is_valid_timestamp(entry.get("createdAt"))
    )


def _all_valid(entries: object, predicate: Callable[[object], bool]) -> bool:
    return isinstance(entries, list) and all(predicate(e) for e in entries)


def _optional_list_valid(
    record: Mapping[str, Any], field: str, predicate: Callable[[object], bool]
) -> bool:
    value = record.get(field)
    return value is None or _all_valid(value, predicate)


def _extensions_valid(record: Mapping[str, Any]) -> bool:
    """Check the fields added after the first release. All are optional."""
    # feelings and order must be numbers whenever the key exists, null included
    feelings = record.get("feelings")
    if "feelings" in record and not (
        _is_number(feelings) and MIN_FEELINGS <= feelings <= MAX_FEELINGS
    ):
        return False
    order = record.get("order")
    if "order" in record and not _is_number(order):
        return False
    status = record.get("status")
    if status is not None and not (isinstance(status, str) and status in STATUSES):
        return False
    picture = record.get("picture")
    if picture is not None and not isinstance(picture, str):
        return False
    return (
        _optional_list_valid(record, "qualities", is_valid_trait)
        and _optional_list_valid(record, "defects", is_valid_trait)
        and _optional_list_valid(record, "diaryEntries", is_valid_diary_entry)
    )


def is_valid_record(candidate: object) -> bool:
    """Decide whether a crush record is well-formed.

    One invalid nested entry disqualifies the whole record; nested lists are
    never repaired. ``mistakes`` is range-checked only, fractional values in
    range pass.

    Lengths are counted in code points. The mobile app counts UTF-16 code
    units, so a name of 50 emoji passes here but is rejected there.
    """
    if not isinstance(candidate, Mapping):
        return False
    record_id = candidate.get("id")
    if not (isinstance(record_id, str) and record_id):
        return False
    if not _is_text(candidate.get("name"), MAX_NAME_LENGTH):
        return False
    mistakes = candidate.get("mistakes")
    if not (_is_number(mistakes) and 0 <= mistakes <= MAX_MISTAKES):
        return False
    if not isinstance(candidate.get("pros"), list) or not isinstance(candidate.get("cons"), list):
        return False
    if not is_valid_timestamp(candidate.get("createdAt")):
        return False
    if not _is_optional_text(candidate.get("description"), MAX_DESCRIPTION_LENGTH):
        return False
    if not (
        _all_valid(candidate["pros"], is_valid_action)
        and _all_valid(candidate["cons"], is_valid_action)
    ):
        return False
    return _extensions_valid(candidate)


def filter_valid(candidates: Iterable[object]) -> list[dict[str, Any]]:
    """Keep only the valid records, preserving their relative order."""
    return [c for c in candidates if is_valid_record(c)]  # type: ignore[misc]
