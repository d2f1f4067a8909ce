"""Fake implementations for testing the persistence layer."""

from typing import Any


class FakeStorage:
    """In-memory fake for StorageProtocol.

    Records all calls for assertions. Failures can be injected per
    (method, key) pair.
    """

    def __init__(self, items: dict[str, str] | None = None) -> None:
        self.items: dict[str, str] = dict(items or {})
        self.calls: list[tuple[str, str, Any]] = []
        self.failures: dict[tuple[str, str], Exception] = {}

    def fail_on(self, method: str, key: str, error: Exception | None = None) -> None:
        """Make every later call of method on key raise error."""
        self.failures[(method, key)] = error or OSError(f"FakeStorage: {method} {key} failed")

    def _check(self, method: str, key: str, value: Any = None) -> None:
        self.calls.append((method, key, value))
        error = self.failures.get((method, key))
        if error is not None:
            raise error

    async def get_item(self, key: str) -> str | None:
        self._check("get_item", key)
        return self.items.get(key)

    async def set_item(self, key: str, value: str) -> None:
        self._check("set_item", key, value)
        self.items[key] = value

    async def remove_item(self, key: str) -> None:
        self._check("remove_item", key)
        self.items.pop(key, None)

    def writes_to(self, key: str) -> list[str]:
        """Values passed to set_item for key, in order."""
        return [value for method, k, value in self.calls if method == "set_item" and k == key]
