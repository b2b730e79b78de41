"""
Global middleware and exception handlers.
"""

from __future__ import annotations

import logging
import time

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from api.exceptions import BookstoreError, UnauthorizedError

logger = logging.getLogger(__name__)

# One body for every 401 so clients cannot tell an unknown email from a
# wrong password, or an expired token from a forged one.
_UNAUTHORIZED_BODY = {"error": "UNAUTHORIZED", "message": "Unauthorized", "details": {}}


def register_middleware(app: FastAPI) -> None:
    """Attach any app-level middleware."""

    @app.middleware("http")
    async def request_timer(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - start
        response.headers["X-Process-Time"] = f"{elapsed:.4f}"
        logger.debug("%s %s — %.3fs", request.method, request.url.path, elapsed)
        return response


def register_exception_handlers(app: FastAPI) -> None:
    """Map domain exceptions to JSON error responses."""

    @app.exception_handler(BookstoreError)
    async def bookstore_error_handler(request: Request, exc: BookstoreError) -> JSONResponse:
        if isinstance(exc, UnauthorizedError):
            logger.info("401 on %s %s: %s (%s)", request.method, request.url.path, exc.message, exc.code)
            return JSONResponse(
                status_code=exc.status_code,
                content=_UNAUTHORIZED_BODY,
                headers={"WWW-Authenticate": "Bearer"},
            )

        if exc.status_code >= 500:
            logger.error("%s on %s %s: %s", exc.status_code, request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())
