"""
Error taxonomy and JSON error responses.

Every error leaves the API as `{"error": <message>, "details"?: [...]}`:
- client errors (bad id, bad query, bad body) -> 400 with sanitized details
- not-found -> 404
- store failures -> 500 with a generic message; the cause is only logged
- anything else unhandled -> 500 "Internal server error." (logged)
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from typing import Any

import asyncpg
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

INVALID_ID_MESSAGE = "Invalid id, must be a positive integer."
INVALID_QUERY_MESSAGE = "Invalid query parameters."
INVALID_BODY_MESSAGE = "Invalid data."
INVALID_REPLACEMENT_MESSAGE = "Invalid data for full replacement."
INTERNAL_ERROR_MESSAGE = "Internal server error."

# RuntimeError covers core.db.pool() before init_pool() has run.
STORAGE_EXCEPTIONS: tuple[type[BaseException], ...] = (
    asyncpg.PostgresError,
    asyncpg.InterfaceError,
    OSError,
    TimeoutError,
    asyncio.TimeoutError,
    RuntimeError,
)


class ApiError(Exception):
    def __init__(
        self,
        status_code: int,
        message: str,
        details: list[dict[str, str]] | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.details = details

    def body(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.message}
        if self.details is not None:
            payload["details"] = self.details
        return payload


def bad_request(message: str, details: list[dict[str, str]] | None = None) -> ApiError:
    return ApiError(status.HTTP_400_BAD_REQUEST, message, details)


def not_found(message: str) -> ApiError:
    return ApiError(status.HTTP_404_NOT_FOUND, message)


@contextmanager
def storage_errors(message: str) -> Iterator[None]:
    """
    Map store failures raised inside the block to a generic 500.
    """
    try:
        yield
    except STORAGE_EXCEPTIONS as exc:
        logger.exception("storage_error message=%r", message)
        raise ApiError(status.HTTP_500_INTERNAL_SERVER_ERROR, message) from exc


def _field_name(location: Sequence[Any], error_type: str) -> str:
    if error_type == "json_invalid" or len(location) < 2:
        return str(location[0]) if location else "body"
    return ".".join(str(part) for part in location[1:])


def sanitize_errors(errors: Sequence[dict[str, Any]]) -> list[dict[str, str]]:
    """
    Reduce validator errors to `{field, kind, message}` entries.
    """
    details: list[dict[str, str]] = []
    for err in errors:
        location = tuple(err.get("loc") or ())
        kind = str(err.get("type") or "invalid")
        details.append(
            {
                "field": _field_name(location, kind),
                "kind": kind,
                "message": str(err.get("msg") or ""),
            }
        )
    return details


def _errors_at(errors: Sequence[dict[str, Any]], source: str) -> list[dict[str, Any]]:
    return [err for err in errors if tuple(err.get("loc") or ("body",))[0] == source]


def validation_failure(exc: RequestValidationError, *, method: str) -> ApiError:
    """
    Pick one message for a failed request; path ids are reported first.
    """
    errors = list(exc.errors())

    path_errors = _errors_at(errors, "path")
    if path_errors:
        return bad_request(INVALID_ID_MESSAGE, sanitize_errors(path_errors))

    query_errors = _errors_at(errors, "query")
    if query_errors:
        return bad_request(INVALID_QUERY_MESSAGE, sanitize_errors(query_errors))

    message = INVALID_REPLACEMENT_MESSAGE if method.upper() == "PUT" else INVALID_BODY_MESSAGE
    return bad_request(message, sanitize_errors(errors))


async def _api_error_handler(_: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.body())


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return await _api_error_handler(request, validation_failure(exc, method=request.method))


async def _http_error_handler(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("unhandled_error method=%s path=%s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": INTERNAL_ERROR_MESSAGE},
    )


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, _api_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)
