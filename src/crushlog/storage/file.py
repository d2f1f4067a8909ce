"""Key-value storage backed by one JSON file per key."""

import asyncio
import os
import re
import tempfile
from pathlib import Path

from loguru import logger

_KEY_RE = re.compile(r"[A-Za-z0-9_][A-Za-z0-9_.-]*")


class FileStorage:
    """Store each key as ``<datadir>/<key>.json``.

    - Writes go to a temporary file in the same directory which is then
      renamed over the target, so readers never see a partial file.
    - Files whose contents did not change are not rewritten.

    Blocking file I/O runs in a worker thread.
    """

    def __init__(self, datadir: str | Path) -> None:
        self.datadir = str(Path(datadir).resolve())

        if not Path(self.datadir).is_dir():
            msg = f"Data directory {self.datadir!r} not found"
            raise ValueError(msg)

        logger.debug("Storage ready, datadir {!r}", self.datadir)

    def path_for(self, key: str) -> Path:
        """Return the file backing key. Raise on keys that could escape datadir."""
        if not _KEY_RE.fullmatch(key) or ".." in key:
            msg = f"Invalid storage key: {key!r}"
            raise ValueError(msg)
        fname = str(Path(self.datadir) / f"{key}.json")
        if not fname.startswith(self.datadir + os.sep):
            msg = f"Path escapes datadir: {fname!r}"
            raise ValueError(msg)
        return Path(fname)

    async def get_item(self, key: str) -> str | None:
        return await asyncio.to_thread(self._read, self.path_for(key))

    async def set_item(self, key: str, value: str) -> None:
        await asyncio.to_thread(self._write, self.path_for(key), value)

    async def remove_item(self, key: str) -> None:
        await asyncio.to_thread(self._remove, self.path_for(key))

    def _read(self, path: Path) -> str | None:
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    def _write(self, path: Path, contents: str) -> None:
        try:
            if path.read_text(encoding="utf-8") == contents:
                logger.debug("Unchanged, not writing {}", path)
                return
            action = "update"
        except (FileNotFoundError, UnicodeDecodeError):
            action = "create"

        logger.debug("Writing ({}) {}", action, path)
        fd, tmp_name = tempfile.mkstemp(dir=self.datadir, prefix=f".{path.stem}-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(contents)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def _remove(self, path: Path) -> None:
        logger.debug("Removing file: {}", path)
        path.unlink(missing_ok=True)
