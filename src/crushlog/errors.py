"""Exceptions raised by crushlog."""


class CrushlogError(Exception):
    """Base class for crushlog errors."""


class InputError(CrushlogError, TypeError):
    """Caller passed data of the wrong shape (or blank text where text is required)."""


class CapacityError(CrushlogError):
    """Serialized collection exceeds the storage ceiling. Nothing was written."""

    def __init__(self, size: int, limit: int) -> None:
        self.size = size
        self.limit = limit
        super().__init__(f"Data size exceeds storage limit: {size} bytes > {limit} bytes")


class RecordLockedError(CrushlogError):
    """Attempt to modify a destroyed crush."""
