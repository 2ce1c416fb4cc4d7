"""Tests for environment-driven settings."""

import pytest

from keepintouch.config import Settings

_VARS = (
    "NEO4J_URI",
    "NEO4J_USER",
    "NEO4J_PASSWORD",
    "KEEPINTOUCH_NAMESPACE",
    "KEEPINTOUCH_STORAGE_QUOTA_BYTES",
    "KEEPINTOUCH_BACKUP_DIR",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    settings = Settings.from_env()
    assert settings.neo4j_uri == "bolt://localhost:7687"
    assert settings.namespace == "default"
    assert settings.storage_quota_bytes is None
    assert settings.backup_dir == "backups"
    assert settings.log_level == "INFO"


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("NEO4J_URI", " bolt://db:7687 ")
    monkeypatch.setenv("KEEPINTOUCH_NAMESPACE", "alice")
    monkeypatch.setenv("KEEPINTOUCH_STORAGE_QUOTA_BYTES", "5242880")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    settings = Settings.from_env()
    assert settings.neo4j_uri == "bolt://db:7687"
    assert settings.namespace == "alice"
    assert settings.storage_quota_bytes == 5242880
    assert settings.log_level == "DEBUG"


def test_blank_values_fall_back_to_defaults(monkeypatch):
    monkeypatch.setenv("KEEPINTOUCH_NAMESPACE", "  ")
    monkeypatch.setenv("KEEPINTOUCH_STORAGE_QUOTA_BYTES", "")
    settings = Settings.from_env()
    assert settings.namespace == "default"
    assert settings.storage_quota_bytes is None


def test_quota_must_be_integer(monkeypatch):
    monkeypatch.setenv("KEEPINTOUCH_STORAGE_QUOTA_BYTES", "5MB")
    with pytest.raises(ValueError, match="KEEPINTOUCH_STORAGE_QUOTA_BYTES must be an integer"):
        Settings.from_env()
