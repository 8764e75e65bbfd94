"""Exception handlers: the single place errors become HTTP responses."""

import logging
from http import HTTPStatus
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from evently.api.middleware import CORRELATION_ID_HEADER
from evently.exceptions import AppError, InternalError, UnauthorizedError
from evently.schemas.common import ErrorResponse

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"

_LOCATIONS = {"body", "query", "path", "header", "cookie"}


def error_response(
    request: Request,
    status_code: int,
    message: str | list[str],
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Build the ``{statusCode, message, error}`` body."""
    body = ErrorResponse(
        status_code=status_code,
        message=message,
        error=HTTPStatus(status_code).phrase,
    )
    response_headers = dict(headers or {})
    correlation_id = getattr(request.state, "correlation_id", None)
    if correlation_id:
        response_headers[CORRELATION_ID_HEADER] = correlation_id
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(by_alias=True),
        headers=response_headers,
    )


def format_validation_error(error: dict[str, Any]) -> str:
    """Turn one pydantic error into a readable message naming the field."""
    loc = [str(part) for part in error["loc"]]
    if loc and loc[0] in _LOCATIONS:
        loc = loc[1:]
    field = ".".join(loc) or "body"

    if error["type"] == "extra_forbidden":
        return f"property {field} should not exist"
    if error["type"] == "value_error" and "error" in error.get("ctx", {}):
        return f"{field} {error['ctx']['error']}"
    return f"{field}: {error['msg']}"


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Handle errors raised by services."""
    if isinstance(exc, InternalError):
        logger.error(f"Internal error: {exc.message}")
        return error_response(request, exc.status_code, INTERNAL_ERROR_MESSAGE)

    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, UnauthorizedError) else None
    return error_response(request, exc.status_code, exc.message, headers=headers)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle framework HTTP errors (unknown route, method not allowed, ...)."""
    message = exc.detail if isinstance(exc.detail, str | list) else str(exc.detail)
    return error_response(request, exc.status_code, message, headers=exc.headers)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report every violated constraint, not just the first."""
    messages = [format_validation_error(error) for error in exc.errors()]
    logger.warning(f"Validation failed for {request.url.path}: {messages}")
    return error_response(request, status.HTTP_400_BAD_REQUEST, messages)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unexpected failures; the client only sees a generic 500."""
    # Runs outside the correlation middleware, so the id is passed explicitly
    correlation_id = getattr(request.state, "correlation_id", None) or "-"
    logger.exception(
        f"Unhandled error on {request.method} {request.url.path}",
        exc_info=exc,
        extra={"correlation_id": correlation_id},
    )
    return error_response(request, status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE)


def register_exception_handlers(app: FastAPI) -> None:
    """Install all exception handlers on ``app``."""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
