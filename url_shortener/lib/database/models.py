"""Data models for URL shortener."""

from dataclasses import dataclass


@dataclass(frozen=True)
class URLRecord:
    """Represents one short code mapping.

    Timestamps are epoch milliseconds. A record is never mutated after
    creation; whether it is expired is computed against the time of the read.
    """

    short_code: str
    original_link: str
    created_at: int
    expires_at: int

    def is_expired(self, now_ms: int) -> bool:
        """Check whether the record is past its validity window."""
        return now_ms > self.expires_at

    def to_dict(self) -> dict:
        """Convert to the persisted layout (keyed externally by short code)."""
        return {
            "originalLink": self.original_link,
            "createdTimestamp": self.created_at,
            "validUntil": self.expires_at,
        }

    @classmethod
    def from_dict(cls, short_code: str, data: dict) -> "URLRecord":
        """Create from the persisted layout.

        Raises:
            ValueError: If the entry is missing fields or has the wrong types
        """
        if not isinstance(data, dict):
            raise ValueError(f"Entry for '{short_code}' is not an object")

        original_link = data.get("originalLink")
        created_at = data.get("createdTimestamp")
        expires_at = data.get("validUntil")

        if not isinstance(original_link, str) or not original_link:
            raise ValueError(f"Entry for '{short_code}' has no originalLink")
        for name, value in (("createdTimestamp", created_at), ("validUntil", expires_at)):
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"Entry for '{short_code}' has invalid {name}")

        return cls(
            short_code=short_code,
            original_link=original_link,
            created_at=int(created_at),
            expires_at=int(expires_at),
        )
