"""Business logic service for URL shortener."""

import asyncio
import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .clock import Clock, SystemClock, MILLIS_PER_MINUTE
from .shortcode import ShortCodeGenerator
from .store import MappingStore
from .database.base import URLStorageBase
from .database.models import URLRecord
from .errors import InvalidUrl, InvalidShortCode, CodeConflict, Expired
from .common.validators import is_valid_url, is_valid_short_code


DEFAULT_TTL_MINUTES = 60


@dataclass(frozen=True)
class URLListing:
    """One row of the short link listing, evaluated at listing time."""

    short_code: str
    original_link: str
    created_at: int
    expires_at: int
    expired: bool


def resolve_ttl_minutes(value: Any, default: float = DEFAULT_TTL_MINUTES) -> float:
    """Return ``value`` if it is a positive finite number, else ``default``.

    Booleans are not numbers here, matching a JSON ``true`` being ignored.
    Floats so large that the lifetime in milliseconds overflows also get
    ``default``.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    if isinstance(value, float) and not math.isfinite(value * MILLIS_PER_MINUTE):
        return default
    if value <= 0:
        return default
    return value


class URLShortenerService:
    """Service layer for URL shortening business logic.

    Owns the mapping table for the lifetime of the process. Every mutation is
    written through to storage before it becomes visible, so a failed write
    leaves the table as it was.
    """

    def __init__(
        self,
        storage: URLStorageBase,
        store: Optional[MappingStore] = None,
        short_code_generator: Optional[ShortCodeGenerator] = None,
        clock: Optional[Clock] = None,
        logger: Optional[logging.Logger] = None,
        default_ttl_minutes: float = DEFAULT_TTL_MINUTES,
        enable_custom_codes: bool = True,
        max_url_length: int = 2048,
        max_custom_code_length: int = 64,
    ):
        """Initialize URL shortener service.

        Args:
            storage: Durable storage the table is flushed to
            store: Mapping table (empty if not specified)
            short_code_generator: Optional short code generator
            clock: Time source (wall clock if not specified)
            logger: Optional logger
            default_ttl_minutes: TTL applied when none or a non-positive one is given
            enable_custom_codes: Whether to allow custom short codes
            max_url_length: Longest accepted original link
            max_custom_code_length: Longest accepted custom code
        """
        if default_ttl_minutes <= 0:
            raise ValueError("Default TTL must be positive")

        self.storage = storage
        self.store = store if store is not None else MappingStore()
        self.generator = short_code_generator or ShortCodeGenerator()
        self.clock = clock or SystemClock()
        self.logger = logger or logging.getLogger(__name__)
        self.default_ttl_minutes = default_ttl_minutes
        self.enable_custom_codes = enable_custom_codes
        self.max_url_length = max_url_length
        self.max_custom_code_length = max_custom_code_length
        self._write_lock = asyncio.Lock()

    @classmethod
    def from_storage(cls, storage: URLStorageBase, **kwargs) -> "URLShortenerService":
        """Build a service whose table is whatever ``storage`` currently holds."""
        return cls(storage=storage, store=MappingStore(storage.load()), **kwargs)

    async def create_short_link(
        self,
        original_link: str,
        custom_code: Optional[str] = None,
        ttl_minutes: Any = None,
    ) -> URLRecord:
        """Create a new short link.

        Args:
            original_link: The original long URL
            custom_code: Optional custom short code; None or "" means generate one
            ttl_minutes: Optional validity in minutes; defaults when not a positive number

        Returns:
            The stored record

        Raises:
            InvalidUrl: If the link is not a well-formed absolute URL
            InvalidShortCode: If the custom code is rejected by policy
            CodeConflict: If the custom code is already in use
            PersistenceFailure: If the table could not be written
        """
        is_valid, error = is_valid_url(original_link, max_length=self.max_url_length)
        if not is_valid:
            self.logger.debug(f"Rejected link {original_link!r}: {error}")
            raise InvalidUrl()

        if custom_code is not None and not isinstance(custom_code, str):
            raise InvalidShortCode("The custom code must be a string.")

        if custom_code:
            if not self.enable_custom_codes:
                raise InvalidShortCode("Custom short codes are not enabled.")
            is_valid, error = is_valid_short_code(custom_code, max_length=self.max_custom_code_length)
            if not is_valid:
                raise InvalidShortCode(f"{error}.")

        ttl = resolve_ttl_minutes(ttl_minutes, self.default_ttl_minutes)

        async with self._write_lock:
            if custom_code:
                if self.store.has(custom_code):
                    raise CodeConflict()
                short_code = custom_code
            else:
                short_code = self.generator.generate(self.store.codes())

            created_at = self.clock.now_ms()
            # At least one millisecond so the record is never born expired
            expires_at = created_at + max(1, round(ttl * MILLIS_PER_MINUTE))
            record = URLRecord(
                short_code=short_code,
                original_link=original_link,
                created_at=created_at,
                expires_at=expires_at,
            )

            table = self.store.snapshot()
            table[short_code] = record
            self.storage.save(table)
            self.store.insert(short_code, record)

        self.logger.info(f"Created short link: {short_code} -> {original_link} (valid until {expires_at})")
        return record

    def _lookup_active(self, short_code: str) -> URLRecord:
        record = self.store.get(short_code)
        if record.is_expired(self.clock.now_ms()):
            raise Expired()
        return record

    async def resolve_short_link(self, short_code: str) -> URLRecord:
        """Get the record for a short code without redirecting.

        Raises:
            NotFound: If the code is unknown
            Expired: If the record is past its validity window
        """
        record = self._lookup_active(short_code)
        self.logger.debug(f"Resolved {short_code} -> {record.original_link}")
        return record

    async def redirect_short_link(self, short_code: str) -> str:
        """Get the redirect target for a short code.

        Same lookup and expiry rules as ``resolve_short_link``.

        Returns:
            The original link to redirect to
        """
        record = self._lookup_active(short_code)
        self.logger.debug(f"Redirecting {short_code} -> {record.original_link}")
        return record.original_link

    async def list_short_links(self) -> List[URLListing]:
        """List every record with its expiry evaluated now."""
        now_ms = self.clock.now_ms()
        listing = [
            URLListing(
                short_code=code,
                original_link=record.original_link,
                created_at=record.created_at,
                expires_at=record.expires_at,
                expired=record.is_expired(now_ms),
            )
            for code, record in self.store.all()
        ]
        listing.sort(key=lambda item: (item.created_at, item.short_code))
        return listing

    async def stats(self) -> Dict[str, Any]:
        """Get counts of stored, active and expired short links."""
        now_ms = self.clock.now_ms()
        records = self.store.all()
        expired = sum(1 for _, record in records if record.is_expired(now_ms))
        return {
            "total": len(records),
            "active": len(records) - expired,
            "expired": expired,
            "storage": self.storage.describe(),
            "custom_codes_enabled": self.enable_custom_codes,
        }
