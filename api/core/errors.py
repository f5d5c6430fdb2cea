"""
Error classification and app-wide exception handlers.

Driver errors are mapped to stable codes here so raw PostgreSQL text (table,
constraint and column names) never reaches clients. The raw text is logged.
"""

from __future__ import annotations

import asyncio
import logging

import asyncpg
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import responses
from .responses import StoreFailure

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL = "DUPLICATE_EMAIL"
CONFLICT = "CONFLICT"
REFERENCE_CONFLICT = "REFERENCE_CONFLICT"
INVALID_INPUT = "INVALID_INPUT"
STORE_UNAVAILABLE = "STORE_UNAVAILABLE"
STORE_ERROR = "STORE_ERROR"

_UNAVAILABLE_ERRORS: tuple[type[BaseException], ...] = (
    asyncpg.PostgresConnectionError,
    asyncpg.CannotConnectNowError,
    asyncpg.TooManyConnectionsError,
    asyncpg.InterfaceError,
    OSError,
    asyncio.TimeoutError,
)

_INVALID_INPUT_ERRORS: tuple[type[BaseException], ...] = (
    asyncpg.NotNullViolationError,
    asyncpg.CheckViolationError,
    asyncpg.DataError,
)


def _mentions_email(exc: BaseException) -> bool:
    for attr in ("constraint_name", "column_name", "detail"):
        value = getattr(exc, attr, None)
        if isinstance(value, str) and "email" in value.lower():
            return True
    return False


def classify_store_error(exc: BaseException) -> StoreFailure:
    """
    Turn a driver exception into a client-safe failure.
    """
    if isinstance(exc, asyncpg.UniqueViolationError):
        if _mentions_email(exc):
            failure = StoreFailure(DUPLICATE_EMAIL, status.HTTP_409_CONFLICT, "Email is already registered.")
        else:
            failure = StoreFailure(CONFLICT, status.HTTP_409_CONFLICT, "Resource already exists.")
    elif isinstance(exc, asyncpg.ForeignKeyViolationError):
        failure = StoreFailure(
            REFERENCE_CONFLICT,
            status.HTTP_409_CONFLICT,
            "Operation conflicts with related records.",
        )
    elif isinstance(exc, _INVALID_INPUT_ERRORS):
        failure = StoreFailure(INVALID_INPUT, status.HTTP_400_BAD_REQUEST, "Invalid input for this operation.")
    elif isinstance(exc, _UNAVAILABLE_ERRORS):
        failure = StoreFailure(
            STORE_UNAVAILABLE,
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Database is unavailable.",
        )
    else:
        logger.exception("Unclassified store error", exc_info=exc)
        return StoreFailure(STORE_ERROR, status.HTTP_500_INTERNAL_SERVER_ERROR, "Database operation failed.")

    logger.warning("Store error classified as %s: %s", failure.code, exc)
    return failure


def _format_validation_errors(exc: RequestValidationError) -> str:
    parts: list[str] = []
    for error in exc.errors():
        loc = [str(item) for item in error.get("loc", ()) if item != "body"]
        field = ".".join(loc) or "body"
        parts.append(f"{field}: {error.get('msg', 'invalid value')}")
    return "Invalid request: " + "; ".join(parts) if parts else "Invalid request."


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return responses.failure(
        status.HTTP_400_BAD_REQUEST,
        _format_validation_errors(exc),
        code=responses.VALIDATION_ERROR,
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    # 405 means the path exists under another method; both fall through to the catch-all.
    if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
        return responses.invalid_route(request.url.path)
    return responses.failure(exc.status_code, str(exc.detail), code="HTTP_ERROR")


def install_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
