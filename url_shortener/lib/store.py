"""In-memory mapping table for URL shortener."""

import threading
from typing import Dict, List, Optional, Set, Tuple

from .database.models import URLRecord
from .errors import CodeConflict, NotFound


class MappingStore:
    """Authoritative table of short code to record.

    Records are never removed. Expiry is not evaluated here; callers compare
    ``expires_at`` with their own notion of now on every read.
    """

    def __init__(self, records: Optional[Dict[str, URLRecord]] = None):
        self._records: Dict[str, URLRecord] = dict(records or {})
        self._lock = threading.Lock()

    def has(self, code: str) -> bool:
        return code in self._records

    def insert(self, code: str, record: URLRecord) -> None:
        """Add a record.

        Raises:
            CodeConflict: If ``code`` is already present, expired or not
        """
        with self._lock:
            if code in self._records:
                raise CodeConflict()
            self._records[code] = record

    def get(self, code: str) -> URLRecord:
        """Look up a record.

        Raises:
            NotFound: If ``code`` is absent
        """
        record = self._records.get(code)
        if record is None:
            raise NotFound()
        return record

    def all(self) -> List[Tuple[str, URLRecord]]:
        with self._lock:
            return list(self._records.items())

    def codes(self) -> Set[str]:
        with self._lock:
            return set(self._records)

    def snapshot(self) -> Dict[str, URLRecord]:
        """Copy of the table, safe to hand to storage."""
        with self._lock:
            return dict(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, code: str) -> bool:
        return self.has(code)
