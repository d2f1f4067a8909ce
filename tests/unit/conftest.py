"""Shared test fixtures."""

import pytest

from crushlog.store import CrushStore
from tests.unit.fakes import FakeStorage


@pytest.fixture
def storage() -> FakeStorage:
    return FakeStorage()


@pytest.fixture
def store(storage: FakeStorage) -> CrushStore:
    return CrushStore(storage)
