"""Exception handlers mapping service errors to JSON responses."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from lib.errors import InvalidShortCode, InvalidUrl, URLShortenerError
from lib.common.correlation import LOG_ID_HEADER, current_log_id
from lib.common.logging_config import log_event

logger = logging.getLogger("url_shortener.api")


def _route_label(request: Request) -> str:
    """Route template label, e.g. "GET /url/{short_code}"."""
    route = request.scope.get("route")
    path = getattr(route, "path", None) or request.url.path
    return f"{request.method} {path}"


def _service_name(request: Request) -> str:
    config = getattr(request.app.state, "config", None)
    return getattr(config, "service_name", "url-shortener")


def _error_response(status_code: int, message: str, log_id: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": message, "LogId": log_id},
        headers={LOG_ID_HEADER: log_id},
    )


# Caller-facing message per offending field, most important first
FIELD_ERROR_MESSAGES = (
    ("url", InvalidUrl.default_message),
    ("customCode", InvalidShortCode.default_message),
)
MALFORMED_BODY_MESSAGE = "The request body could not be read."


def _error_fields(error: dict) -> tuple:
    return tuple(str(part) for part in error.get("loc", ()) if part != "body")


def _describe_validation_error(errors: list) -> str:
    """Stable message for a rejected request; pydantic details stay in the log."""
    fields = {_error_fields(error)[0] for error in errors if _error_fields(error)}
    for field, message in FIELD_ERROR_MESSAGES:
        if field in fields:
            return message
    return MALFORMED_BODY_MESSAGE


async def handle_service_error(request: Request, exc: URLShortenerError) -> JSONResponse:
    """Known failures: stable message, status from the error class."""
    level = "error" if exc.status_code >= 500 else "warning"
    log_id = log_event(
        logger,
        _route_label(request),
        level,
        exc.message,
        service=_service_name(request),
        error=exc.__class__.__name__,
        path=request.url.path,
    )
    return _error_response(exc.status_code, exc.message, log_id)


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request bodies are caller errors (400), not 422."""
    errors = list(exc.errors())
    message = _describe_validation_error(errors)
    log_id = log_event(
        logger,
        _route_label(request),
        "warning",
        message,
        service=_service_name(request),
        details="; ".join(
            f"{'.'.join(_error_fields(error)) or 'body'}: {error.get('msg', 'invalid value')}"
            for error in errors
        ),
    )
    return _error_response(status.HTTP_400_BAD_REQUEST, message, log_id)


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """Anything else: generic message to the caller, traceback to the log."""
    log_id = getattr(request.state, "log_id", None) or current_log_id()
    logger.exception(
        f"{_route_label(request)}: unhandled error",
        extra={"log_id": log_id},
    )
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error.", log_id)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(URLShortenerError, handle_service_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
