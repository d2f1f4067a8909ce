"""Input sanitization, record validation and persistence for crush tracking."""

from loguru import logger

from crushlog.core.sanitize import sanitize
from crushlog.core.validation import filter_valid, is_valid_record
from crushlog.errors import CapacityError, CrushlogError, InputError, RecordLockedError
from crushlog.logging_config import configure_logging
from crushlog.protocols import StorageProtocol
from crushlog.storage.file import FileStorage
from crushlog.storage.memory import MemoryStorage
from crushlog.store import CrushStore, open_store

# Silent by default; applications opt in with configure_logging().
logger.disable("crushlog")

__all__ = [
    "CapacityError",
    "CrushStore",
    "CrushlogError",
    "FileStorage",
    "InputError",
    "MemoryStorage",
    "RecordLockedError",
    "StorageProtocol",
    "configure_logging",
    "filter_valid",
    "is_valid_record",
    "open_store",
    "sanitize",
]
