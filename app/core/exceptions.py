"""
Global exception handlers — prevents stack-trace leakage to clients.

Store and unexpected errors end up on one generic error page; gate
failures turn into a redirect to the login form.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import RedirectResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException

from app.core.templating import render

logger = logging.getLogger(__name__)


class LoginRequired(Exception):
    """Raised by the access gates; always answered with a redirect to /login."""


async def _login_required_handler(_request: Request, _exc: LoginRequired) -> RedirectResponse:
    return RedirectResponse(url="/login", status_code=status.HTTP_302_FOUND)


async def _http_exception_handler(request: Request, exc: HTTPException):
    return render(
        request,
        "error.html",
        {"error": exc.detail, "status_code": exc.status_code},
        status_code=exc.status_code,
    )


async def _sqlalchemy_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error("Database error: %s", exc, exc_info=True)
    return render(
        request,
        "error.html",
        {"error": "Internal database error", "status_code": 500},
        status_code=500,
    )


async def _generic_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception: %s", exc)
    return render(
        request,
        "error.html",
        {"error": "Internal server error", "status_code": 500},
        status_code=500,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach all exception handlers to the FastAPI app."""
    app.add_exception_handler(LoginRequired, _login_required_handler)  # type: ignore[arg-type]
    app.add_exception_handler(HTTPException, _http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)  # type: ignore[arg-type]
    app.add_exception_handler(SQLAlchemyError, _sqlalchemy_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, _generic_exception_handler)
