"""Blob storage backends for persisted shopping state."""

from shopperspoint.storage.base import InMemoryKeyValueStore, KeyValueStore
from shopperspoint.storage.sqlite import SqliteKeyValueStore

__all__ = ["InMemoryKeyValueStore", "KeyValueStore", "SqliteKeyValueStore"]
