"""
Application entry point — wires dependencies and starts the HTTP server.

Composition root: creates the concrete storage backend, wraps it in the
config store adapter, and hands that to the ASGI app.

This is the ONLY place where concrete adapter classes are chosen.
Everything else depends on Protocol interfaces.

Responsibilities:
  1. Configure structlog for structured logging
  2. Load and validate configuration from environment
  3. Create the key-value backend (memory or PostgreSQL) and config store
  4. Run Uvicorn serving pki_urls.asgi:app
"""

from __future__ import annotations

import logging
import sys

import structlog
import uvicorn

from pki_urls import __version__
from pki_urls.adapters.config_store import KeyValueUrlConfigStore
from pki_urls.adapters.storage import InMemoryStorage, PsycopgStorage
from pki_urls.config import AppSettings
from pki_urls.domain.ports import KeyValueStorage


def configure_structlog(log_level: str = "INFO") -> None:
    """
    Configure structlog for structured, console-rendered logging.

    Unknown level names fall back to INFO.
    """
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, log_level.upper(), logging.INFO)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def _create_storage(settings: AppSettings) -> KeyValueStorage:
    """Instantiate the configured key-value backend."""
    if settings.storage.backend == "postgres":
        storage = PsycopgStorage(
            dsn=settings.database.get_dsn(),
            table=settings.storage.table,
            connect_attempts=settings.storage.connect_attempts,
        )
        storage.ensure_schema()
        return storage
    return InMemoryStorage()


def create_store(settings: AppSettings) -> KeyValueUrlConfigStore:
    """Build the config store adapter over the configured backend."""
    return KeyValueUrlConfigStore(_create_storage(settings))


def main() -> None:
    """Load settings and serve the ASGI app."""
    try:
        settings = AppSettings()
    except Exception as e:
        print(f"FATAL: Configuration error — {e}", file=sys.stderr)  # noqa: T201
        sys.exit(1)

    configure_structlog(settings.log_level)
    log = structlog.get_logger()

    log.info(
        "app.starting",
        version=__version__,
        log_level=settings.log_level,
        storage_backend=settings.storage.backend,
        host=settings.http.host,
        port=settings.http.port,
    )

    try:
        uvicorn.run(
            "pki_urls.asgi:app",
            host=settings.http.host,
            port=settings.http.port,
            log_level=settings.log_level.lower(),
        )
    except KeyboardInterrupt:
        log.info("app.shutdown", reason="signal received")


if __name__ == "__main__":
    main()
