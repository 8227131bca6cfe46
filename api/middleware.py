"""
Global middleware.
"""

from __future__ import annotations

import logging
import time

from fastapi import FastAPI, Request

from api.errors import internal_error_response

logger = logging.getLogger(__name__)


def register_middleware(app: FastAPI) -> None:
    """Attach any app-level middleware; call before adding CORS so CORS wraps it."""

    @app.middleware("http")
    async def request_timer(request: Request, call_next):
        # Bodies carry passwords; only the request line is logged.
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as exc:
            # Answered here rather than by ServerErrorMiddleware so the
            # 500 still passes back through CORSMiddleware.
            response = internal_error_response(request, exc)
        elapsed = time.perf_counter() - start
        response.headers["X-Process-Time"] = f"{elapsed:.4f}"
        logger.info(
            "%s %s -> %d (%.3fs)",
            request.method, request.url.path, response.status_code, elapsed,
        )
        return response
