"""Application configuration helpers."""

from __future__ import annotations

import math
import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

ENV_FILE_CANDIDATES = (Path(".env"), Path(".env.local"))


class Settings(BaseModel):
    """Global application settings loaded from environment variables or .env files."""

    database_path: Path = Field(
        default=Path("./data/shopperspoint.db"),
        description="SQLite database holding the persisted key/value blobs.",
    )
    default_tax_rate: float = Field(
        default=0.01,
        ge=0,
        description="Tax rate used when none has been persisted yet.",
    )
    log_level: str = Field(default="WARNING", description="Logging level (DEBUG/INFO/WARNING/ERROR)")
    log_format: str = Field(
        default="plain",
        description="Logging format (plain/json).",
    )

    model_config = ConfigDict(frozen=True)


def _parse_env_file(path: Path) -> dict[str, str]:
    payload: dict[str, str] = {}
    try:
        with path.open("r", encoding="utf-8") as handle:
            for raw_line in handle:
                line = raw_line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue
                key, raw_value = line.split("=", 1)
                payload[key.strip()] = raw_value.strip()
    except FileNotFoundError:
        return {}
    return payload


def _load_env_file_values() -> dict[str, str]:
    values: dict[str, str] = {}
    for candidate in ENV_FILE_CANDIDATES:
        values.update(_parse_env_file(candidate))
    return values


def _load_from_env() -> dict[str, object]:
    """Load optional overrides from env vars (with .env fallbacks)."""

    file_values = _load_env_file_values()

    def _env(key: str) -> Optional[str]:
        return os.environ.get(key) or file_values.get(key)

    payload: dict[str, object] = {}
    if (db_path := _env("SHOPPERSPOINT_DATABASE_PATH")):
        payload["database_path"] = Path(db_path)
    if (tax_rate := _env("SHOPPERSPOINT_DEFAULT_TAX_RATE")):
        try:
            parsed_rate = float(tax_rate)
        except ValueError:
            parsed_rate = None
        if parsed_rate is not None and math.isfinite(parsed_rate) and parsed_rate >= 0:
            payload["default_tax_rate"] = parsed_rate
    if (log_level := _env("SHOPPERSPOINT_LOG_LEVEL")):
        payload["log_level"] = log_level
    if (log_format := _env("SHOPPERSPOINT_LOG_FORMAT")):
        payload["log_format"] = log_format
    return payload


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings."""

    return Settings(**_load_from_env())
