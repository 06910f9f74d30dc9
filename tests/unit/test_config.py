"""
Unit tests for AppSettings — environment-driven configuration.

Each test sets environment variables via monkeypatch and disables the
.env file, so results don't depend on the developer's machine.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from pki_urls.config import AppSettings, DatabaseSettings


def _settings() -> AppSettings:
    return AppSettings(_env_file=None)  # type: ignore[call-arg]


class TestDefaults:
    def test_memory_backend_needs_no_configuration(self) -> None:
        settings = _settings()

        assert settings.storage.backend == "memory"
        assert settings.storage.table == "pki_storage"
        assert settings.storage.connect_attempts == 3
        assert settings.http.port == 8000
        assert settings.log_level == "INFO"


class TestNestedEnvironment:
    def test_nested_delimiter_maps_storage_fields(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("STORAGE__BACKEND", "postgres")
        monkeypatch.setenv("STORAGE__TABLE", "issuer_kv")
        monkeypatch.setenv("DATABASE__DSN", "postgresql://u:p@db:5432/pki")

        settings = _settings()

        assert settings.storage.backend == "postgres"
        assert settings.storage.table == "issuer_kv"
        assert settings.database.get_dsn() == "postgresql://u:p@db:5432/pki"

    def test_log_level_is_normalized(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "debug")
        assert _settings().log_level == "DEBUG"


class TestValidation:
    def test_postgres_without_database_fails_at_startup(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """
        GIVEN storage.backend=postgres and no database settings
        WHEN settings are loaded
        THEN a ValidationError lists the missing variables.
        """
        monkeypatch.setenv("STORAGE__BACKEND", "postgres")

        with pytest.raises(ValidationError, match="DATABASE__HOST"):
            _settings()

    def test_unknown_backend_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("STORAGE__BACKEND", "etcd")
        with pytest.raises(ValidationError):
            _settings()

    @pytest.mark.parametrize("table", ["1table", "drop table;", "kv-store"])
    def test_table_must_be_plain_identifier(self, monkeypatch: pytest.MonkeyPatch, table: str) -> None:
        monkeypatch.setenv("STORAGE__TABLE", table)
        with pytest.raises(ValidationError):
            _settings()

    def test_unknown_log_level_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "LOUD")
        with pytest.raises(ValidationError):
            _settings()

    def test_connect_attempts_must_be_positive(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("STORAGE__CONNECT_ATTEMPTS", "0")
        with pytest.raises(ValidationError):
            _settings()


class TestDatabaseSettings:
    def test_dsn_built_from_components(self) -> None:
        db = DatabaseSettings(host="db", port=5433, name="pki", username="u", password="p")  # type: ignore[arg-type]
        assert db.get_dsn() == "postgresql://u:p@db:5433/pki"

    def test_explicit_dsn_wins(self) -> None:
        db = DatabaseSettings(dsn="postgresql://x/y", host="ignored")  # type: ignore[arg-type]
        assert db.get_dsn() == "postgresql://x/y"

    def test_incomplete_components_raise(self) -> None:
        db = DatabaseSettings(host="db")
        assert db.missing_components() == ["DATABASE__NAME", "DATABASE__USERNAME", "DATABASE__PASSWORD"]
        with pytest.raises(ValueError, match="DATABASE__DSN"):
            db.get_dsn()
