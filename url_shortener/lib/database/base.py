"""Abstract base class for URL shortener storage implementations."""

from abc import ABC, abstractmethod
from typing import Dict

from .models import URLRecord


class URLStorageBase(ABC):
    """Durable home of the short code table.

    The service loads the whole table once at startup and hands the whole
    table back after every mutation. Implementations never write partially.
    """

    @abstractmethod
    def load(self) -> Dict[str, URLRecord]:
        """Load the persisted table.

        Returns:
            Mapping of short code to record. Empty if nothing usable is stored;
            this method never raises for absent or malformed data.
        """
        pass

    @abstractmethod
    def save(self, table: Dict[str, URLRecord]) -> None:
        """Overwrite storage with the full table.

        Args:
            table: Mapping of short code to record

        Raises:
            PersistenceFailure: If the table could not be written
        """
        pass

    def describe(self) -> str:
        """Human readable location, used in logs and stats."""
        return self.__class__.__name__


class InMemoryStorage(URLStorageBase):
    """Non-durable storage; keeps a copy of the last saved table."""

    def __init__(self, initial: Dict[str, URLRecord] = None):
        self._table: Dict[str, URLRecord] = dict(initial or {})
        self.save_count = 0

    def load(self) -> Dict[str, URLRecord]:
        return dict(self._table)

    def save(self, table: Dict[str, URLRecord]) -> None:
        # Records are frozen, a shallow copy is enough
        self._table = dict(table)
        self.save_count += 1

    def describe(self) -> str:
        return "memory"
