"""
landchain_registry.api.errors

Exception-to-response mapping.

Responsibilities:
- Render `RegistryError` subclasses with their own status code.
- Render anything unexpected as HTTP 500 with the raw message, and log it.
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from landchain_registry.errors import RegistryError
from landchain_registry.observability.logging import get_logger

log = get_logger(__name__)


def error_body(message: str) -> dict[str, object]:
    return {"success": False, "error": message}


def install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(RegistryError)
    async def _registry_error(_: Request, exc: RegistryError) -> JSONResponse:
        if exc.status_code >= 500:
            log.warning("request_failed", error=exc.message, status_code=exc.status_code)
        return JSONResponse(status_code=exc.status_code, content=error_body(exc.message))

    @app.exception_handler(Exception)
    async def _unhandled(_: Request, exc: Exception) -> JSONResponse:
        log.exception("unhandled_error")
        return JSONResponse(status_code=500, content=error_body(str(exc)))
