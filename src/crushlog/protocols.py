"""Protocols for dependency injection in the persistence layer."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class StorageProtocol(Protocol):
    """Protocol for async key-value stores holding serialized blobs."""

    async def get_item(self, key: str) -> str | None:
        """Return the stored string, or None if the key is absent."""
        ...

    async def set_item(self, key: str, value: str) -> None:
        """Store a string under key, replacing any previous value."""
        ...

    async def remove_item(self, key: str) -> None:
        """Delete key. Deleting an absent key is not an error."""
        ...
