"""
Configuration — typed, validated settings loaded from environment/.env.

Uses pydantic-settings to:
  - Load from environment variables (12-factor app)
  - Fall back to .env file
  - Validate types and constraints at startup

Only AppSettings is a BaseSettings instance. Sub-settings are plain BaseModel
classes populated via env_nested_delimiter="__", so STORAGE__BACKEND maps to
storage.backend, DATABASE__HOST to database.host, etc.

The database section is only required when storage.backend is "postgres";
the in-memory backend runs with no external configuration at all.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve the .env file relative to the project root (two levels above this file),
# so settings load correctly regardless of the working directory at runtime.
_ENV_FILE = Path(__file__).parent.parent.parent / ".env"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class DatabaseSettings(BaseModel):
    """
    PostgreSQL connection configuration.

    Accepts either a full connection string via DATABASE__DSN or individual
    components (host, port, name, username, password). The DSN takes
    priority when both are provided.
    """

    dsn: SecretStr | None = Field(
        default=None,
        description="Full PostgreSQL connection string (overrides individual fields)",
    )
    host: str | None = Field(default=None, description="PostgreSQL host")
    port: int = Field(default=5432, ge=1, le=65535, description="PostgreSQL port")
    name: str | None = Field(default=None, description="PostgreSQL database name")
    username: str | None = Field(default=None, description="PostgreSQL username")
    password: SecretStr | None = Field(default=None, description="PostgreSQL password")

    def missing_components(self) -> list[str]:
        """Names of the component fields needed to build a DSN that are unset."""
        if self.dsn is not None:
            return []
        return [env for env, value in [
            ("DATABASE__HOST", self.host),
            ("DATABASE__NAME", self.name),
            ("DATABASE__USERNAME", self.username),
            ("DATABASE__PASSWORD", self.password),
        ] if not value]

    def get_dsn(self) -> str:
        """
        Return the active DSN as a plain string.

        Built from components when DATABASE__DSN is not set.
        Raises ValueError if neither form is complete.
        """
        if self.dsn is not None:
            return self.dsn.get_secret_value()
        missing = self.missing_components()
        if missing:
            raise ValueError("Set DATABASE__DSN or provide all of: " + ", ".join(missing))
        return (
            f"postgresql://{self.username}:{self.password.get_secret_value()}"  # type: ignore[union-attr]
            f"@{self.host}:{self.port}/{self.name}"
        )


class StorageSettings(BaseModel):
    """Which key-value backend holds the URL config record."""

    backend: Literal["memory", "postgres"] = Field(
        default="memory",
        description="'memory' (process-local) or 'postgres'",
    )
    table: str = Field(default="pki_storage", description="Key-value table name (postgres only)")
    connect_attempts: int = Field(
        default=3, ge=1, description="Attempts per storage call on transient connection errors",
    )

    @field_validator("table")
    @classmethod
    def validate_table(cls, value: str) -> str:
        """Reject table names that are not plain SQL identifiers."""
        if not value or not value.replace("_", "").isalnum() or value[0].isdigit():
            raise ValueError(f"Storage table must be a plain identifier, got {value!r}")
        return value


class HttpSettings(BaseModel):
    """Bind address for the ASGI server."""

    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000, ge=1, le=65535)


class AppSettings(BaseSettings):
    """
    Root application settings — aggregates all sub-settings.

    Load order (highest priority first):
      1. Environment variables
      2. .env file
      3. Default values
    """

    model_config = SettingsConfigDict(
        env_file=_ENV_FILE,
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    storage: StorageSettings = Field(default_factory=lambda: StorageSettings())
    database: DatabaseSettings = Field(default_factory=lambda: DatabaseSettings())
    http: HttpSettings = Field(default_factory=lambda: HttpSettings())

    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Normalize to upper case and reject names the logging module doesn't know."""
        level = value.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}, got {value!r}")
        return level

    @model_validator(mode="after")
    def require_database_for_postgres(self) -> AppSettings:
        """Fail at startup if the postgres backend is selected without a usable DSN."""
        if self.storage.backend == "postgres":
            missing = self.database.missing_components()
            if missing:
                raise ValueError(
                    "storage.backend is 'postgres': set DATABASE__DSN or provide all of: "
                    + ", ".join(missing)
                )
        return self
