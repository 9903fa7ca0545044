"""
Local key-value storage.

Per-device store for small JSON blobs (settings, mentor notes,
streak start dates), backed by the stored_values table.
"""

import json
import logging
from typing import Any, Optional

from ficus.core.config import Config
from ficus.core.db import session_scope
from ficus.core.models import StoredValue

logger = logging.getLogger(__name__)


class LocalStore:
    """
    String key-value store.

    Reads never raise on bad data: absent or malformed
    values fall back to the caller's default.
    """

    def __init__(self, config: Config):
        self.config = config

    def get(self, key: str) -> Optional[str]:
        """Get raw value, None if absent."""
        with session_scope(self.config) as session:
            row = session.get(StoredValue, key)
            return row.value if row else None

    def set(self, key: str, value: str) -> None:
        """Insert or replace a raw value."""
        with session_scope(self.config) as session:
            row = session.get(StoredValue, key)
            if row:
                row.value = value
            else:
                session.add(StoredValue(key=key, value=value))

        logger.debug(f"Stored {key} ({len(value)} chars)")

    def remove(self, key: str) -> None:
        """Delete a key if present."""
        with session_scope(self.config) as session:
            row = session.get(StoredValue, key)
            if row:
                session.delete(row)

    def get_json(self, key: str, default: Any = None) -> Any:
        """
        Get a JSON value.

        Returns default when the key is absent or unparseable.
        """
        raw = self.get(key)
        if raw is None:
            return default

        try:
            return json.loads(raw)
        except ValueError as e:
            logger.warning(f"Malformed JSON under {key}, using default: {e}")
            return default

    def set_json(self, key: str, value: Any) -> None:
        """Store a value as JSON."""
        self.set(key, json.dumps(value, ensure_ascii=False))
