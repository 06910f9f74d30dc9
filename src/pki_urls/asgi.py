"""
FastAPI + Uvicorn ASGI application — HTTP surface for the URL config.

Routes:
  GET  /config/urls       → 200 with the three URL lists, 204 if never configured
  POST /config/urls       → 204 on success, error body otherwise
  GET  /config/urls/help  → synopsis and description of the path
  GET  /health, /info     → probes and metadata

Every handler call runs inside a LoggingExecutionContext, so an exception
escaping the domain still comes back as a structured 500 response.

Entry point for production: uvicorn pki_urls.asgi:app --host 0.0.0.0 --port 8000
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import structlog
from fastapi import FastAPI, Response
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from railway import LoggingExecutionContext
from railway.http_support import build_fastapi_response

from pki_urls import __version__
from pki_urls.config import AppSettings
from pki_urls.domain.models import UrlConfigUpdate
from pki_urls.domain.ports import UrlConfigStore
from pki_urls.handler import HELP_DESCRIPTION, HELP_SYNOPSIS, read_urls, write_urls
from pki_urls.main import configure_structlog, create_store

# ─────────────────────── Global State ───────────────────────
# Set during app startup; tests assign them directly.

_store: UrlConfigStore | None = None
_error_message: str | None = None
log = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    FastAPI lifespan context manager — runs on startup and shutdown.

    Startup: load settings, configure logging, build the config store.
    """
    global _store, _error_message

    try:
        settings = AppSettings()
    except Exception as e:
        _error_message = f"Configuration error: {e}"
        log.error("asgi.startup_error", error=_error_message)
        raise

    configure_structlog(settings.log_level)
    log.info(
        "asgi.startup_config",
        version=__version__,
        log_level=settings.log_level,
        storage_backend=settings.storage.backend,
    )

    try:
        _store = create_store(settings)
    except Exception as e:
        _error_message = f"Failed to initialize storage: {e}"
        log.error("asgi.init_error", error=_error_message)
        raise

    log.info("asgi.startup_complete")

    yield

    log.info("asgi.shutdown_complete")


# ─────────────────────── Request Model ───────────────────────


class UrlConfigRequest(BaseModel):
    """
    Write request body. Every field is optional; omitted or null fields
    are left untouched, "" clears the field.
    """

    issuing_certificates: str | None = Field(
        default=None,
        description="Comma-separated list of URLs to be used for the issuing certificate attribute",
    )
    crl_distribution_points: str | None = Field(
        default=None,
        description="Comma-separated list of URLs to be used for the CRL distribution points attribute",
    )
    ocsp_servers: str | None = Field(
        default=None,
        description="Comma-separated list of URLs to be used for the OCSP servers attribute",
    )

    def to_update(self) -> UrlConfigUpdate:
        return UrlConfigUpdate(
            issuing_certificates=self.issuing_certificates,
            crl_distribution_points=self.crl_distribution_points,
            ocsp_servers=self.ocsp_servers,
        )


# ─────────────────────── FastAPI Application ───────────────────────

app = FastAPI(
    title="pki-urls",
    description="Issuing CA, CRL distribution point, and OCSP server URLs for issued certificates",
    version=__version__,
    lifespan=lifespan,
)


def _unavailable() -> JSONResponse:
    return JSONResponse(
        status_code=503,
        content={"status": "unavailable", "reason": _error_message or "Storage not initialized"},
    )


@app.get("/config/urls", summary=HELP_SYNOPSIS, description=HELP_DESCRIPTION)
def get_urls() -> Response:
    """Read the configured URLs; 204 when nothing has been written yet."""
    store = _store
    if store is None:
        return _unavailable()

    result = LoggingExecutionContext(operation="ReadUrls").execute(lambda: read_urls(store))
    if result.is_success() and not result.value():
        return Response(status_code=204)
    return build_fastapi_response(result)


@app.post("/config/urls", summary=HELP_SYNOPSIS, description=HELP_DESCRIPTION)
def post_urls(request: UrlConfigRequest) -> Response:
    """Partially update the configured URLs; 204 with no body on success."""
    store = _store
    if store is None:
        return _unavailable()

    update = request.to_update()
    result = LoggingExecutionContext(operation="WriteUrls").execute(
        lambda: write_urls(store, update)
    )
    return build_fastapi_response(result, success_status=204)


@app.get("/config/urls/help")
def get_urls_help() -> dict[str, str]:
    return {"synopsis": HELP_SYNOPSIS, "description": HELP_DESCRIPTION}


@app.get("/health")
def health() -> JSONResponse:
    """Liveness: 200 once the store is wired, 503 on startup failure."""
    if _error_message:
        log.warning("health.check_failed", error=_error_message)
        return JSONResponse(
            status_code=503,
            content={"status": "unhealthy", "error": _error_message},
        )
    if _store is None:
        return JSONResponse(
            status_code=503,
            content={"status": "unhealthy", "reason": "storage not initialized"},
        )
    return JSONResponse(status_code=200, content={"status": "healthy"})


@app.get("/info")
def info() -> dict[str, Any]:
    return {
        "name": "pki-urls",
        "version": __version__,
        "storage_ready": _store is not None,
        "has_error": _error_message is not None,
    }


if __name__ == "__main__":
    # For local testing: python -m uvicorn pki_urls.asgi:app --reload
    import uvicorn

    uvicorn.run(
        "pki_urls.asgi:app",
        host="0.0.0.0",
        port=8000,
        reload=False,
        log_level="info",
    )
