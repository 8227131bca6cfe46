"""
Exception handlers rendering every failure into the JSON envelope
``{"success": false, "message": ..., ["error": ...]}``.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import DBAPIError
from starlette.exceptions import HTTPException as StarletteHTTPException

from auth.errors import AuthError, InternalError

logger = logging.getLogger(__name__)


def _envelope(status_code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message, **extra},
    )


def _error_kind(exc: Exception) -> str:
    # Never str(exc): DBAPIError text embeds the SQL and its parameters.
    if isinstance(exc, DBAPIError) and exc.orig is not None:
        return type(exc.orig).__name__
    return type(exc).__name__


def internal_error_response(request: Request, exc: Exception) -> JSONResponse:
    """500 envelope for an exception nothing else handled."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    error = InternalError()
    return _envelope(error.status_code, error.message, error=_error_kind(exc))


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the envelope handlers to ``app``."""

    @app.exception_handler(AuthError)
    async def auth_error_handler(request: Request, exc: AuthError):
        return _envelope(exc.status_code, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            return _envelope(exc.status_code, "Route not found")
        return _envelope(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        logger.debug("Rejected request body on %s: %s", request.url.path, exc.errors())
        return _envelope(status.HTTP_400_BAD_REQUEST, "Invalid request body")

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        return internal_error_response(request, exc)
