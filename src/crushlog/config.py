"""Configuration constants for crushlog."""

import os
from pathlib import Path

# Storage keys. The backup slot always holds the previous primary blob.
PRIMARY_KEY: str = "crushes"
BACKUP_KEY: str = "crushes_backup"

# Serialized payload ceiling, in UTF-8 bytes.
MAX_PAYLOAD_BYTES: int = 2 * 1024 * 1024

# Field limits, counted in code points.
MAX_NAME_LENGTH: int = 50
MAX_DESCRIPTION_LENGTH: int = 500
MAX_ACTION_TITLE_LENGTH: int = 100
MAX_ACTION_DESCRIPTION_LENGTH: int = 500
MAX_TRAIT_TEXT_LENGTH: int = 50
MAX_DIARY_TITLE_LENGTH: int = 100
MAX_DIARY_DESCRIPTION_LENGTH: int = 1000

# A crush with this many mistakes is destroyed and can no longer be edited.
MAX_MISTAKES: int = 5

MIN_FEELINGS: int = 0
MAX_FEELINGS: int = 100
DEFAULT_FEELINGS: int = 50

STATUSES: frozenset[str] = frozenset({"active", "ended", "standby"})
DEFAULT_STATUS: str = "active"

# Directory with data files. First directory which is found is used.
DATA_DIRECTORIES: list[Path] = [
    Path("~/.local/share/crushlog").expanduser(),
    Path("~/.crushlog").expanduser(),
    Path("~/.config/crushlog").expanduser(),
]

DATA_DIR_ENV: str = "CRUSHLOG_DATA_DIR"


def resolve_data_directory() -> Path:
    """Return the data directory for file storage.

    ``$CRUSHLOG_DATA_DIR`` wins when set. Otherwise the first existing entry of
    DATA_DIRECTORIES is used, falling back to the first one.
    """
    override = os.environ.get(DATA_DIR_ENV)
    if override:
        return Path(override).expanduser()
    for candidate in DATA_DIRECTORIES:
        if candidate.is_dir():
            return candidate
    return DATA_DIRECTORIES[0]
