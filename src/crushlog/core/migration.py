"""Bring records written by older versions up to the current shape."""

from collections.abc import Mapping
from typing import Any

from crushlog.config import DEFAULT_FEELINGS, DEFAULT_STATUS

# Fields that default to an empty list when missing or falsy.
_LIST_FIELDS = ("qualities", "defects")


def migrate_record(record: object, index: int) -> object:
    """Fill in fields that did not exist when the record was written.

    Existing values win. Non-mapping input is returned unchanged and left for
    the validator to reject.

    Args:
        record: Raw record as decoded from storage.
        index: Position of the record in the stored list, used as default ``order``.
    """
    if not isinstance(record, Mapping):
        return record
    migrated: dict[str, Any] = dict(record)
    for field in _LIST_FIELDS:
        migrated[field] = record.get(field) or []
    migrated.setdefault("feelings", DEFAULT_FEELINGS)
    migrated.setdefault("order", index)
    migrated.setdefault("status", DEFAULT_STATUS)
    migrated.setdefault("diaryEntries", [])
    migrated.setdefault("picture", None)
    return migrated
