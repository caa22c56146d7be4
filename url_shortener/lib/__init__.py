"""Core business logic for URL shortener."""

from .shortcode import ShortCodeGenerator
from .store import MappingStore
from .service import URLShortenerService, URLListing, resolve_ttl_minutes
from .clock import SystemClock, FixedClock

__all__ = [
    "ShortCodeGenerator",
    "MappingStore",
    "URLShortenerService",
    "URLListing",
    "resolve_ttl_minutes",
    "SystemClock",
    "FixedClock",
]
