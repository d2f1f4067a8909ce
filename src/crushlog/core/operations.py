"""Record transformations performed on user request.

Each function takes a record dict and returns a new one; the input is never
mutated. User text goes through :func:`sanitize` first, and text that is blank
after sanitizing (or too long to pass validation) raises :class:`InputError` so
the caller can tell the user instead of having the record dropped on save.
"""

from collections.abc import Iterable, Mapping
from datetime import UTC, datetime
from typing import Any

from crushlog.config import (
    DEFAULT_FEELINGS,
    DEFAULT_STATUS,
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
from crushlog.core.sanitize import sanitize
from crushlog.errors import InputError, RecordLockedError
from crushlog.models.record import ActionEntry, DiaryEntry, Trait

_ACTION_FIELDS = {"pro": "pros", "con": "cons"}
_TRAIT_FIELDS = {"quality": "qualities", "defect": "defects"}

Record = dict[str, Any]


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _timestamp(now: datetime) -> str:
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _new_id(now: datetime, taken: Iterable[object]) -> str:
    """Millisecond timestamp as a string, bumped until it is not in taken."""
    taken_ids = {str(x) for x in taken}
    value = int(now.timestamp() * 1000)
    while str(value) in taken_ids:
        value += 1
    return str(value)


def _ids(entries: Iterable[Mapping[str, Any]]) -> list[object]:
    return [e.get("id") for e in entries]


def _clean(value: object, field: str, max_length: int, *, required: bool) -> str:
    text = sanitize(value)
    if required and not text:
        msg = f"{field} must not be blank"
        raise InputError(msg)
    if len(text) > max_length:
        msg = f"{field} is too long ({len(text)} > {max_length} characters)"
        raise InputError(msg)
    return text


def _field_for(kind: str, fields: Mapping[str, str]) -> str:
    try:
        return fields[kind]
    except KeyError:
        msg = f"Unknown kind {kind!r}, expected one of {sorted(fields)!r}"
        raise ValueError(msg) from None


def is_destroyed(record: Mapping[str, Any]) -> bool:
    """A crush that used up all its lives."""
    mistakes = record.get("mistakes", 0)
    return isinstance(mistakes, int | float) and mistakes >= MAX_MISTAKES


def _check_editable(record: Mapping[str, Any]) -> None:
    if is_destroyed(record):
        msg = f"Crush {record.get('id')!r} is destroyed and can no longer be modified"
        raise RecordLockedError(msg)


def new_crush(
    name: object,
    description: object = "",
    *,
    existing: Iterable[Mapping[str, Any]] = (),
    order: int | None = None,
) -> Record:
    """Build a fresh crush with all lives left.

    Args:
        name: User-entered name.
        description: User-entered description.
        existing: Records already in the collection, used to keep ids unique.
        order: Position in the list; defaults to after all existing records.
    """
    existing = list(existing)
    now = _utcnow()
    return {
        "id": _new_id(now, _ids(existing)),
        "name": _clean(name, "Name", MAX_NAME_LENGTH, required=True),
        "description": _clean(description, "Description", MAX_DESCRIPTION_LENGTH, required=False),
        "mistakes": 0,
        "pros": [],
        "cons": [],
        "createdAt": _timestamp(now),
        "qualities": [],
        "defects": [],
        "feelings": DEFAULT_FEELINGS,
        "order": len(existing) if order is None else order,
        "status": DEFAULT_STATUS,
        "diaryEntries": [],
        "picture": None,
    }


def add_action(
    record: Mapping[str, Any], kind: str, title: object, description: object = ""
) -> Record:
    """Log a pro or a con. A con costs one life."""
    field = _field_for(kind, _ACTION_FIELDS)
    _check_editable(record)
    entries = list(record.get(field) or [])
    now = _utcnow()
    entry = ActionEntry(
        id=_new_id(now, _ids(record.get("pros") or []) + _ids(record.get("cons") or [])),
        title=_clean(title, "Title", MAX_ACTION_TITLE_LENGTH, required=True),
        description=_clean(
            description, "Description", MAX_ACTION_DESCRIPTION_LENGTH, required=False
        ),
        created_at=_timestamp(now),
    )
    updated = {**record, field: [*entries, entry.to_dict()]}
    if kind == "con":
        updated["mistakes"] = min(record.get("mistakes", 0) + 1, MAX_MISTAKES)
    return updated


def remove_action(record: Mapping[str, Any], kind: str, action_id: str) -> Record:
    """Drop a pro or a con by id. Removing a con gives a life back."""
    field = _field_for(kind, _ACTION_FIELDS)
    entries = list(record.get(field) or [])
    kept = [e for e in entries if e.get("id") != action_id]
    updated = {**record, field: kept}
    if kind == "con" and len(kept) != len(entries):
        updated["mistakes"] = max(0, record.get("mistakes", 0) - 1)
    return updated


def add_trait(record: Mapping[str, Any], kind: str, text: object) -> Record:
    field = _field_for(kind, _TRAIT_FIELDS)
    _check_editable(record)
    entries = list(record.get(field) or [])
    now = _utcnow()
    trait = Trait(
        id=_new_id(now, _ids(entries)),
        text=_clean(text, "Text", MAX_TRAIT_TEXT_LENGTH, required=True),
        created_at=_timestamp(now),
    )
    return {**record, field: [*entries, trait.to_dict()]}


def remove_trait(record: Mapping[str, Any], kind: str, trait_id: str) -> Record:
    field = _field_for(kind, _TRAIT_FIELDS)
    return {**record, field: [t for t in record.get(field) or [] if t.get("id") != trait_id]}


def add_diary_entry(
    record: Mapping[str, Any], title: object, description: object = ""
) -> Record:
    """Prepend a journal entry, newest first."""
    entries = list(record.get("diaryEntries") or [])
    now = _utcnow()
    entry = DiaryEntry(
        id=_new_id(now, _ids(entries)),
        title=_clean(title, "Title", MAX_DIARY_TITLE_LENGTH, required=True),
        description=_clean(
            description, "Description", MAX_DIARY_DESCRIPTION_LENGTH, required=False
        ),
        created_at=_timestamp(now),
    )
    return {**record, "diaryEntries": [entry.to_dict(), *entries]}


def remove_diary_entry(record: Mapping[str, Any], entry_id: str) -> Record:
    entries = record.get("diaryEntries") or []
    return {**record, "diaryEntries": [e for e in entries if e.get("id") != entry_id]}


def set_description(record: Mapping[str, Any], text: object) -> Record:
    return {
        **record,
        "description": _clean(text, "Description", MAX_DESCRIPTION_LENGTH, required=False),
    }


def set_status(record: Mapping[str, Any], status: str) -> Record:
    if status not in STATUSES:
        msg = f"Unknown status {status!r}, expected one of {sorted(STATUSES)!r}"
        raise ValueError(msg)
    return {**record, "status": status}


def set_feelings(record: Mapping[str, Any], value: float) -> Record:
    """Set the feelings gauge, clamped to its range."""
    return {**record, "feelings": max(MIN_FEELINGS, min(MAX_FEELINGS, value))}
