"""JSON file implementation for URL shortener storage."""

import os
import json
import logging
import tempfile
from pathlib import Path
from typing import Dict, Optional, Union

from .base import URLStorageBase
from .models import URLRecord
from ..errors import PersistenceFailure


class JSONFileStorage(URLStorageBase):
    """Single JSON document keyed by short code, rewritten on every save.

    Layout:
        {
            "abc": {
                "originalLink": "https://example.com",
                "createdTimestamp": 1700000000000,
                "validUntil": 1700000060000
            }
        }
    """

    def __init__(
        self,
        path: Union[str, Path],
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize JSON file storage.

        Args:
            path: Location of the data file
            logger: Optional logger instance
        """
        self.path = Path(path)
        self.logger = logger or logging.getLogger(__name__)

    def load(self) -> Dict[str, URLRecord]:
        """Load the table, falling back to empty on absent or malformed data."""
        if not self.path.exists():
            self.logger.info(f"No data file at {self.path}, starting with an empty table")
            return {}

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, ValueError) as e:
            self.logger.warning(f"Could not read data file {self.path}: {e}; starting with an empty table")
            return {}

        if not isinstance(raw, dict):
            self.logger.warning(f"Data file {self.path} does not hold an object; starting with an empty table")
            return {}

        table: Dict[str, URLRecord] = {}
        for short_code, entry in raw.items():
            try:
                table[short_code] = URLRecord.from_dict(short_code, entry)
            except ValueError as e:
                self.logger.warning(f"Skipping malformed entry in {self.path}: {e}")

        self.logger.info(f"Loaded {len(table)} short links from {self.path}")
        return table

    def save(self, table: Dict[str, URLRecord]) -> None:
        """Write the full table atomically (temp file + rename)."""
        payload = {code: record.to_dict() for code, record in table.items()}

        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                dir=self.path.parent,
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self.path)
            tmp_name = None
        except (OSError, TypeError, ValueError) as e:
            self.logger.error(f"Failed to write data file {self.path}: {e}")
            raise PersistenceFailure() from e
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)

        self.logger.debug(f"Saved {len(payload)} short links to {self.path}")

    def describe(self) -> str:
        return str(self.path)
