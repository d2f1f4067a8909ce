"""Load and save the crush collection with backup and self-healing."""

import asyncio
import json
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from loguru import logger

from crushlog.config import BACKUP_KEY, MAX_PAYLOAD_BYTES, PRIMARY_KEY, resolve_data_directory
from crushlog.core.migration import migrate_record
from crushlog.core.validation import filter_valid
from crushlog.errors import CapacityError, InputError
from crushlog.protocols import StorageProtocol
from crushlog.storage.file import FileStorage


def _order_key(record: dict[str, Any]) -> float:
    return record.get("order", 0)


class CrushStore:
    """Persistence façade for the crush collection.

    The collection lives in two slots of a key-value storage: the primary blob
    and a backup holding whatever the primary contained before the last write.
    Only records passing :func:`filter_valid` ever get in or out.

    Writes are serialized through a lock so the backup copy and the primary
    write of one call never interleave with another call.
    """

    def __init__(
        self,
        storage: StorageProtocol,
        *,
        primary_key: str = PRIMARY_KEY,
        backup_key: str = BACKUP_KEY,
        max_bytes: int = MAX_PAYLOAD_BYTES,
    ) -> None:
        self.storage = storage
        self.primary_key = primary_key
        self.backup_key = backup_key
        self.max_bytes = max_bytes
        self._lock = asyncio.Lock()

    async def _read_collection(self) -> tuple[Any | None, bool]:
        """Return the decoded primary blob, falling back to the backup.

        Returns:
            Tuple of (decoded data or None when nothing is usable, whether the
            data came from the backup slot).
        """
        # Undecodable bytes, oversized integer literals and runaway nesting all
        # count as corruption: UnicodeDecodeError and JSONDecodeError are ValueErrors.
        try:
            data = await self.storage.get_item(self.primary_key)
            if not data:
                return None, False
            return json.loads(data), False
        except (ValueError, RecursionError) as e:
            logger.error("Data corruption detected ({}), attempting to load backup...", e)

        try:
            backup = await self.storage.get_item(self.backup_key)
            if not backup:
                logger.warning("No backup available, starting with an empty collection")
                return None, False
            return json.loads(backup), True
        except (ValueError, RecursionError) as e:
            logger.error("Backup is corrupted too ({}), starting with an empty collection", e)
            return None, False

    async def load(self) -> list[dict[str, Any]]:
        """Return all valid records, sorted by their ``order`` field.

        Never raises: unreadable or corrupted storage yields an empty list.
        When records had to be migrated or dropped, or the primary blob was
        corrupted, the cleaned collection is written back.
        """
        try:
            raw, from_backup = await self._read_collection()
            if raw is None:
                return []
            if not isinstance(raw, list):
                logger.error("Invalid data structure: expected list, got {}", type(raw).__name__)
                return []

            migrated = [migrate_record(r, i) for i, r in enumerate(raw)]
            valid = filter_valid(migrated)

            if from_backup or valid != raw:
                logger.warning(
                    "Migrated/cleaned {} crush(es), {} dropped", len(raw), len(raw) - len(valid)
                )
                try:
                    # A corrupted primary must not overwrite the good backup.
                    await self._write(valid, backup=not from_backup)
                except Exception as e:
                    logger.warning("Could not write back cleaned crushes: {}", e)

            return sorted(valid, key=_order_key)
        except Exception:
            logger.exception("Error loading crushes")
            return []

    async def save(self, records: Sequence[Any]) -> None:
        """Validate and write the whole collection.

        Invalid records are dropped silently.

        Raises:
            InputError: records is not a list or tuple.
            CapacityError: the serialized collection is larger than ``max_bytes``;
                the primary blob is left untouched.
        """
        if not isinstance(records, list | tuple):
            msg = f"Invalid crushes data: must be a list, got {type(records).__name__}"
            raise InputError(msg)
        await self._write(filter_valid(records), backup=True)

    async def _write(self, valid: list[dict[str, Any]], *, backup: bool) -> None:
        payload = json.dumps(valid, ensure_ascii=False, separators=(",", ":"))
        size = len(payload.encode("utf-8"))

        async with self._lock:
            if backup:
                await self._backup_primary()

            if size > self.max_bytes:
                logger.error("Refusing to save {} crush(es): {} bytes", len(valid), size)
                raise CapacityError(size, self.max_bytes)

            try:
                await self.storage.set_item(self.primary_key, payload)
            except Exception:
                logger.exception("Error saving crushes")
                raise
        logger.debug("Saved {} crush(es), {} bytes", len(valid), size)

    async def clear(self) -> None:
        """Remove the primary blob after copying it to the backup slot."""
        async with self._lock:
            await self._backup_primary()
            try:
                await self.storage.remove_item(self.primary_key)
            except Exception:
                logger.exception("Error clearing crushes")
                raise

    async def update(self, record: dict[str, Any]) -> list[dict[str, Any]]:
        """Replace the record with the same id (or append it) and save.

        Returns:
            The collection as saved, in load order.
        """
        records = await self.load()
        for i, existing in enumerate(records):
            if existing["id"] == record.get("id"):
                records[i] = record
                break
        else:
            records.append(record)
        await self.save(records)
        return filter_valid(records)

    async def delete(self, record_id: str) -> list[dict[str, Any]]:
        """Drop the record with record_id and save the rest."""
        records = [r for r in await self.load() if r["id"] != record_id]
        await self.save(records)
        return records

    async def _backup_primary(self) -> None:
        """Copy the current primary blob to the backup slot. Best effort."""
        try:
            current = await self.storage.get_item(self.primary_key)
            if current:
                await self.storage.set_item(self.backup_key, current)
        except Exception as e:
            logger.warning("Could not create backup: {}", e)


def open_store(datadir: str | Path | None = None) -> CrushStore:
    """Return a store backed by JSON files in datadir (created if missing).

    Without datadir, the directory comes from :func:`resolve_data_directory`.
    Call :func:`crushlog.configure_logging` first to see recovery warnings.
    """
    path = Path(datadir).expanduser() if datadir is not None else resolve_data_directory()
    path.mkdir(parents=True, exist_ok=True)
    return CrushStore(FileStorage(path))
