"""Shared pytest fixtures for the ShoppersPoint test suite."""

from __future__ import annotations

import logging
from typing import Generator

import pytest

from shopperspoint.config import get_settings
from shopperspoint.storage.base import InMemoryKeyValueStore
from shopperspoint.storage.repository import reset_repository_state
from shopperspoint.store import ShoppingStore


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Ensure each test uses an isolated SQLite database location."""

    root = logging.getLogger()
    saved_level = root.level
    db_path = tmp_path / "test_shopperspoint.db"
    monkeypatch.setenv("SHOPPERSPOINT_DATABASE_PATH", str(db_path))
    get_settings.cache_clear()
    reset_repository_state()
    yield
    reset_repository_state()
    monkeypatch.delenv("SHOPPERSPOINT_DATABASE_PATH", raising=False)
    get_settings.cache_clear()
    # Drop handlers installed by configure_logging; pytest manages its own capture handlers.
    for handler in list(root.handlers):
        if type(handler) is logging.StreamHandler:
            root.removeHandler(handler)
    root.setLevel(saved_level)


@pytest.fixture()
def backend() -> InMemoryKeyValueStore:
    """Empty in-memory blob store."""

    return InMemoryKeyValueStore()


@pytest.fixture()
def store(backend) -> Generator[ShoppingStore, None, None]:
    """Fresh store with no persisted state."""

    yield ShoppingStore(backend)
