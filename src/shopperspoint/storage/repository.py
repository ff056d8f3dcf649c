"""SQLite engines for the blob store, one per database file."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from shopperspoint.config import get_settings
from shopperspoint.storage.models import Base

_engines: Dict[Path, Engine] = {}
logger = logging.getLogger(__name__)


def resolve_database_path(database_path: Path | None = None) -> Path:
    """Absolute database location, falling back to the configured path."""

    path = database_path if database_path is not None else get_settings().database_path
    return Path(path).expanduser().resolve()


def get_engine(database_path: Path | None = None) -> Engine:
    """Return the engine for ``database_path``, creating the file and schema on first use."""

    db_path = resolve_database_path(database_path)
    engine = _engines.get(db_path)
    if engine is not None:
        return engine

    db_path.parent.mkdir(parents=True, exist_ok=True)
    engine = create_engine(f"sqlite:///{db_path}", future=True, echo=False)
    Base.metadata.create_all(engine)
    _engines[db_path] = engine
    logger.debug("Opened blob database at %s", db_path)
    return engine


@contextmanager
def session_scope(engine: Engine) -> Generator[Session, None, None]:
    """Yield a session bound to ``engine`` with automatic commit/rollback."""
    session = Session(engine, autoflush=False, future=True)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def reset_repository_state() -> None:
    """Dispose every cached engine (intended for testing)."""

    for engine in _engines.values():
        engine.dispose()
    _engines.clear()


__all__ = ["get_engine", "resolve_database_path", "session_scope", "reset_repository_state"]
