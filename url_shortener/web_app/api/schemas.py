"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, Field
from typing import Any, List, Optional


class ShortenRequest(BaseModel):
    """Request to shorten a URL.

    ``expiryMinutes`` is taken as-is; anything other than a positive number
    means the default validity.
    """

    url: Optional[str] = Field(None, description="The URL to shorten")
    custom_code: Optional[str] = Field(None, alias="customCode", description="Optional custom short code")
    expiry_minutes: Optional[Any] = Field(
        None,
        alias="expiryMinutes",
        description="Validity in minutes; 60 when omitted or not positive",
    )

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "examples": [
                {
                    "url": "https://example.com/very/long/path/to/resource",
                },
                {
                    "url": "https://github.com/user/repo",
                    "customCode": "myrepo",
                    "expiryMinutes": 30
                }
            ]
        }
    }


class CorrelatedResponse(BaseModel):
    """Every response body carries the request's LogId."""

    log_id: str = Field(..., alias="LogId", description="Correlation id of the request")

    model_config = {"populate_by_name": True}


class ShortenResponse(CorrelatedResponse):
    """Response after shortening a URL."""

    short_code: str = Field(..., alias="shortCode", description="The short code")
    valid_until: int = Field(..., alias="validUntil", description="Expiry, epoch milliseconds")


class ResolveResponse(CorrelatedResponse):
    """Response with the original link of a short code."""

    original_link: str = Field(..., alias="originalLink")
    valid_until: int = Field(..., alias="validUntil")


class URLListItem(BaseModel):
    """One short link in the listing."""

    short_code: str = Field(..., alias="shortCode")
    original_link: str = Field(..., alias="originalLink")
    created_timestamp: int = Field(..., alias="createdTimestamp")
    valid_until: int = Field(..., alias="validUntil")
    expired: bool

    model_config = {"populate_by_name": True}


class URLListResponse(CorrelatedResponse):
    """Listing of every stored short link."""

    urls: List[URLListItem]


class HealthResponse(CorrelatedResponse):
    """Health check response."""

    status: str = Field(..., description="Overall status")
    total: int = Field(..., description="Stored short links")
    active: int = Field(..., description="Short links still resolvable")
    expired: int = Field(..., description="Short links past their validity")


class ErrorResponse(CorrelatedResponse):
    """Error response."""

    error: str = Field(..., description="Error message")
