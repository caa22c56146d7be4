"""Validation utilities for URL shortener."""

import re
from urllib.parse import urlparse
from typing import Tuple


SCHEME_PATTERN = re.compile(r'^[A-Za-z][A-Za-z0-9+.\-]*$')
SHORT_CODE_PATTERN = re.compile(r'^[A-Za-z0-9_-]+$')


def is_valid_url(url: str, max_length: int = 2048) -> Tuple[bool, str]:
    """Validate an absolute URL.

    Any scheme is accepted as long as it is followed by a parseable
    authority (``scheme://host[:port]``).

    Args:
        url: The URL to validate
        max_length: Maximum accepted length

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not url or not isinstance(url, str):
        return False, "URL is required"

    if len(url) > max_length:
        return False, f"URL is too long (max {max_length} characters)"

    if any(c.isspace() or ord(c) < 0x20 for c in url):
        return False, "URL must not contain whitespace or control characters"

    try:
        result = urlparse(url)

        if not result.scheme or not SCHEME_PATTERN.match(result.scheme):
            return False, "URL must have a scheme"

        if not result.netloc or not result.hostname:
            return False, "URL must have a valid host"

        # Raises ValueError for a non-numeric or out of range port
        result.port

        return True, ""

    except ValueError as e:
        return False, f"Invalid URL format: {str(e)}"


def is_valid_short_code(short_code: str, min_length: int = 1, max_length: int = 64) -> Tuple[bool, str]:
    """Validate a caller-supplied short code.

    Args:
        short_code: The short code to validate
        min_length: Minimum length for short code
        max_length: Maximum length for short code

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not short_code or not isinstance(short_code, str):
        return False, "Short code is required"

    if len(short_code) < min_length:
        return False, f"Short code must be at least {min_length} characters"

    if len(short_code) > max_length:
        return False, f"Short code must be at most {max_length} characters"

    # Only allow alphanumeric characters, hyphens, and underscores
    if not SHORT_CODE_PATTERN.match(short_code):
        return False, "Short code can only contain letters, numbers, hyphens, and underscores"

    return True, ""
