"""API routes implementation."""

import json
import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import RedirectResponse
from pydantic import ValidationError

from .schemas import (
    ShortenRequest,
    ShortenResponse,
    ResolveResponse,
    URLListItem,
    URLListResponse,
    HealthResponse,
    ErrorResponse,
)
from lib.common.logging_config import log_event

router = APIRouter()

logger = logging.getLogger("url_shortener.api")

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def _service_name(request: Request) -> str:
    return request.app.state.config.service_name


async def read_shorten_request(request: Request) -> ShortenRequest:
    """Parse a JSON or form-encoded body into a ShortenRequest.

    An empty body is an empty object. Form fields arrive as strings, so a
    form-encoded ``expiryMinutes`` always means the default validity.
    """
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        data = dict(form.items())
    else:
        raw = await request.body()
        try:
            data = json.loads(raw) if raw else {}
        except ValueError as e:
            raise RequestValidationError(
                [{"type": "json_invalid", "loc": ("body",), "msg": f"JSON decode error: {e}"}]
            )

    try:
        return ShortenRequest.model_validate(data)
    except ValidationError as e:
        raise RequestValidationError(e.errors(), body=data)


_SHORTEN_BODY_SCHEMA = ShortenRequest.model_json_schema(by_alias=True)


@router.post(
    "/shorten",
    response_model=ShortenResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid URL or custom code"},
        409: {"model": ErrorResponse, "description": "Short code already exists"},
        500: {"model": ErrorResponse, "description": "Short link could not be persisted"},
    },
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {
                "application/json": {"schema": _SHORTEN_BODY_SCHEMA},
                "application/x-www-form-urlencoded": {"schema": _SHORTEN_BODY_SCHEMA},
            },
        },
    },
    summary="Create short URL",
    description="Create a short link from a JSON or form-encoded body. Optionally provide a custom short code and an expiry in minutes.",
)
async def shorten_url(request: Request, body: ShortenRequest = Depends(read_shorten_request)):
    """Create a shortened URL."""
    service = request.app.state.service

    record = await service.create_short_link(
        original_link=body.url,
        custom_code=body.custom_code,
        ttl_minutes=body.expiry_minutes,
    )

    log_id = log_event(
        logger,
        "POST /shorten",
        "info",
        "Web address has been shortened.",
        service=_service_name(request),
        originalLink=record.original_link,
        shortCode=record.short_code,
        validUntil=record.expires_at,
    )

    return ShortenResponse(
        short_code=record.short_code,
        valid_until=record.expires_at,
        log_id=log_id,
    )


@router.get(
    "/url/{short_code}",
    response_model=ResolveResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Short code not found"},
        410: {"model": ErrorResponse, "description": "Short link expired"},
    },
    summary="Resolve short URL",
    description="Get the original link of a short code without redirecting.",
)
async def resolve_url(request: Request, short_code: str):
    """Get the original link for a short code."""
    service = request.app.state.service

    record = await service.resolve_short_link(short_code)

    log_id = log_event(
        logger,
        "GET /url/:shortCode",
        "info",
        "Original web address found.",
        service=_service_name(request),
        shortCode=short_code,
        originalLink=record.original_link,
    )

    return ResolveResponse(
        original_link=record.original_link,
        valid_until=record.expires_at,
        log_id=log_id,
    )


@router.get(
    "/s/{short_code}",
    response_class=RedirectResponse,
    responses={
        302: {"description": "Redirect to the original link"},
        404: {"model": ErrorResponse, "description": "Short code not found"},
        410: {"model": ErrorResponse, "description": "Short link expired"},
    },
    summary="Redirect short URL",
)
async def redirect_to_url(request: Request, short_code: str):
    """Redirect to the original URL."""
    service = request.app.state.service

    original_link = await service.redirect_short_link(short_code)

    log_event(
        logger,
        "GET /s/:shortCode",
        "info",
        "Redirecting to original web address.",
        service=_service_name(request),
        shortCode=short_code,
        originalLink=original_link,
    )

    # Temporary redirect so clients keep asking us until the link expires
    return RedirectResponse(url=original_link, status_code=status.HTTP_302_FOUND)


@router.get(
    "/urls",
    response_model=URLListResponse,
    summary="List short URLs",
    description="List every stored short link, flagging the expired ones.",
)
async def list_urls(request: Request):
    """List all short links with their details."""
    service = request.app.state.service

    listing = await service.list_short_links()
    urls = [
        URLListItem(
            short_code=item.short_code,
            original_link=item.original_link,
            created_timestamp=item.created_at,
            valid_until=item.expires_at,
            expired=item.expired,
        )
        for item in listing
    ]

    log_id = log_event(
        logger,
        "GET /urls",
        "info",
        "History retrieved.",
        service=_service_name(request),
        count=len(urls),
    )

    return URLListResponse(urls=urls, log_id=log_id)


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Report whether the service is up and how many links it holds.",
)
async def health_check(request: Request):
    """Health check endpoint for load balancers and monitoring."""
    service = request.app.state.service

    stats = await service.stats()

    log_id = log_event(
        logger,
        "GET /health",
        "debug",
        "Health checked.",
        service=_service_name(request),
        **stats,
    )

    return HealthResponse(
        status="healthy",
        total=stats["total"],
        active=stats["active"],
        expired=stats["expired"],
        log_id=log_id,
    )
