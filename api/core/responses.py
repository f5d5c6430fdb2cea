"""
Tagged store outcomes and the JSON envelope every endpoint returns.

Envelope shape:
    {"success": bool, "message": str, "data"?: ..., "path"?: str, "code"?: str}

Failure envelopes never carry `data`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

NOT_FOUND = "NOT_FOUND"
INVALID_ROUTE = "INVALID_ROUTE"
VALIDATION_ERROR = "VALIDATION_ERROR"


@dataclass(frozen=True)
class Found:
    # None means "nothing to return" (e.g. a delete confirmation).
    data: Any = None


@dataclass(frozen=True)
class NotFound:
    message: str = "user not found"


@dataclass(frozen=True)
class StoreFailure:
    code: str
    status_code: int
    message: str


Result = Union[Found, NotFound, StoreFailure]


def envelope(
    *,
    success: bool,
    message: str,
    data: Any = None,
    path: str | None = None,
    code: str | None = None,
) -> dict[str, Any]:
    body: dict[str, Any] = {"success": success, "message": message}
    if success and data is not None:
        body["data"] = data
    if path is not None:
        body["path"] = path
    if code is not None:
        body["code"] = code
    return body


def failure(status_code: int, message: str, *, code: str, path: str | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=envelope(success=False, message=message, code=code, path=path),
    )


def respond(result: Result, *, status_code: int = status.HTTP_200_OK, message: str) -> JSONResponse:
    """
    Map a store outcome to an HTTP response.

    Found -> `status_code` with `message`; NotFound -> 404;
    StoreFailure -> its own status and code.
    """
    if isinstance(result, Found):
        return JSONResponse(
            status_code=status_code,
            content=jsonable_encoder(envelope(success=True, message=message, data=result.data)),
        )
    if isinstance(result, NotFound):
        return failure(status.HTTP_404_NOT_FOUND, result.message, code=NOT_FOUND)
    if isinstance(result, StoreFailure):
        return failure(result.status_code, result.message, code=result.code)
    raise TypeError(f"Unsupported result type: {type(result).__name__}")


def invalid_route(path: str) -> JSONResponse:
    return failure(status.HTTP_404_NOT_FOUND, "Invalid route", code=INVALID_ROUTE, path=path)
