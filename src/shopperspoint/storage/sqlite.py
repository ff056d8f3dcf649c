"""SQLite-backed key/value blob store."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

from sqlalchemy import delete, select

from .models import BlobEntryORM
from .repository import get_engine, resolve_database_path, session_scope

logger = logging.getLogger(__name__)


class SqliteKeyValueStore:
    """Persist blobs in the ``blob_entries`` table of one database file.

    ``database_path`` defaults to the configured ``SHOPPERSPOINT_DATABASE_PATH``.
    Stores opened on different paths never share data.
    """

    def __init__(self, database_path: Path | None = None) -> None:
        self.database_path = resolve_database_path(database_path)
        self._engine = get_engine(self.database_path)

    def get(self, key: str) -> Optional[bytes]:
        with session_scope(self._engine) as session:
            row = session.get(BlobEntryORM, key)
            if row is None:
                return None
            return bytes(row.value)

    def set(self, key: str, value: bytes) -> None:
        logger.debug("Writing %d bytes under key=%s", len(value), key)
        with session_scope(self._engine) as session:
            session.merge(BlobEntryORM(key=key, value=bytes(value)))

    def remove(self, key: str) -> None:
        logger.debug("Removing key=%s", key)
        with session_scope(self._engine) as session:
            session.execute(delete(BlobEntryORM).where(BlobEntryORM.key == key))

    def keys(self) -> List[str]:
        with session_scope(self._engine) as session:
            return list(session.execute(select(BlobEntryORM.key)).scalars().all())


__all__ = ["SqliteKeyValueStore"]
