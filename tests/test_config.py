"""Tests for settings loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from shopperspoint.config import get_settings


def test_defaults(monkeypatch):
    for key in (
        "SHOPPERSPOINT_DATABASE_PATH",
        "SHOPPERSPOINT_DEFAULT_TAX_RATE",
        "SHOPPERSPOINT_LOG_LEVEL",
        "SHOPPERSPOINT_LOG_FORMAT",
    ):
        monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()

    settings = get_settings()

    assert settings.database_path == Path("./data/shopperspoint.db")
    assert settings.default_tax_rate == 0.01
    assert settings.log_level == "WARNING"
    assert settings.log_format == "plain"


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("SHOPPERSPOINT_DATABASE_PATH", str(tmp_path / "x.db"))
    monkeypatch.setenv("SHOPPERSPOINT_DEFAULT_TAX_RATE", "0.05")
    monkeypatch.setenv("SHOPPERSPOINT_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("SHOPPERSPOINT_LOG_FORMAT", "json")
    get_settings.cache_clear()

    settings = get_settings()

    assert settings.database_path == tmp_path / "x.db"
    assert settings.default_tax_rate == 0.05
    assert settings.log_level == "DEBUG"
    assert settings.log_format == "json"


def test_unparseable_tax_rate_keeps_default(monkeypatch):
    monkeypatch.setenv("SHOPPERSPOINT_DEFAULT_TAX_RATE", "one percent")
    get_settings.cache_clear()

    assert get_settings().default_tax_rate == 0.01


def test_env_file_fallback(monkeypatch, tmp_path):
    monkeypatch.delenv("SHOPPERSPOINT_LOG_LEVEL", raising=False)
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".env").write_text("# local overrides\nSHOPPERSPOINT_LOG_LEVEL=ERROR\n", encoding="utf-8")
    get_settings.cache_clear()

    assert get_settings().log_level == "ERROR"


@pytest.mark.parametrize("raw", ["-0.05", "nan", "inf"])
def test_out_of_range_tax_rate_keeps_default(monkeypatch, raw):
    monkeypatch.setenv("SHOPPERSPOINT_DEFAULT_TAX_RATE", raw)
    get_settings.cache_clear()

    assert get_settings().default_tax_rate == 0.01
