"""Tests for environment settings and logging setup."""

import logging
from decimal import Decimal

import pytest
import structlog

from ledgerbook.domain.errors import InvalidNumericInputError
from ledgerbook.logging_config import configure_logging
from ledgerbook.settings import Settings


def test_defaults(monkeypatch):
    for name in ("LEDGERBOOK_DB_PATH", "LEDGERBOOK_HST_RATE", "LEDGERBOOK_LOG_LEVEL", "LEDGERBOOK_LOG_JSON"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings.from_env()

    assert settings.db_path is None
    assert settings.hst_rate == Decimal("0.13")
    assert settings.log_level == "WARNING"
    assert settings.log_json is False


def test_from_env(monkeypatch):
    monkeypatch.setenv("LEDGERBOOK_DB_PATH", "/tmp/books.db")
    monkeypatch.setenv("LEDGERBOOK_HST_RATE", "0.05")
    monkeypatch.setenv("LEDGERBOOK_LOG_LEVEL", "debug")
    monkeypatch.setenv("LEDGERBOOK_LOG_JSON", "true")

    settings = Settings.from_env()

    assert settings.db_path == "/tmp/books.db"
    assert settings.hst_rate == Decimal("0.05")
    assert settings.log_level == "DEBUG"
    assert settings.log_json is True


def test_invalid_rate(monkeypatch):
    monkeypatch.setenv("LEDGERBOOK_HST_RATE", "-0.1")
    with pytest.raises(InvalidNumericInputError):
        Settings.from_env()


def test_default_db_path(monkeypatch, tmp_path):
    monkeypatch.setenv("HOME", str(tmp_path))
    path = Settings.default_db_path()
    assert path == tmp_path / ".ledgerbook" / "ledgerbook.db"
    assert path.parent.is_dir()


def test_configure_logging_sets_level():
    configure_logging("INFO")
    assert logging.getLogger().level == logging.INFO
    assert structlog.is_configured()
    configure_logging("WARNING", json=True)
    assert logging.getLogger().level == logging.WARNING


def test_configure_logging_rejects_unknown_level():
    with pytest.raises(ValueError):
        configure_logging("LOUD")
