"""Storage layer for URL shortener."""

from .base import URLStorageBase, InMemoryStorage
from .json_file import JSONFileStorage
from .models import URLRecord

__all__ = ["URLStorageBase", "InMemoryStorage", "JSONFileStorage", "URLRecord"]
