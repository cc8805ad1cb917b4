"""In-process implementation of the key/value store.

Keeps every record in a dict owned by the event loop thread. Each method
completes without yielding, so single-key operations are atomic with respect
to other tasks. Expiry is checked lazily on access.
"""

import logging
import time
from typing import Optional, Dict, Tuple

from .base import KeyValueStore


class MemoryStore(KeyValueStore):
    """Key/value store held in process memory."""

    def __init__(
        self,
        store_url: str = "memory://",
        logger: Optional[logging.Logger] = None,
        clock=time.monotonic,
    ):
        super().__init__(store_url)
        self.logger = logger or logging.getLogger(__name__)
        self._clock = clock
        # key -> (fields, expires_at or None)
        self._data: Dict[str, Tuple[Dict[str, str], Optional[float]]] = {}

    def _live_fields(self, key: str) -> Optional[Dict[str, str]]:
        entry = self._data.get(key)
        if entry is None:
            return None
        fields, expires_at = entry
        if expires_at is not None and self._clock() >= expires_at:
            del self._data[key]
            return None
        return fields

    async def get(self, key: str) -> Optional[Dict[str, str]]:
        fields = self._live_fields(key)
        return dict(fields) if fields else None

    async def set(
        self,
        key: str,
        mapping: Dict[str, str],
        ttl_seconds: Optional[int] = None,
    ) -> None:
        expires_at = self._clock() + ttl_seconds if ttl_seconds else None
        self._data[key] = ({k: str(v) for k, v in mapping.items()}, expires_at)

    async def set_field_if_exists(self, key: str, field: str, value: str) -> bool:
        fields = self._live_fields(key)
        if fields is None:
            return False
        fields[field] = str(value)
        return True

    async def increment(self, key: str, field: str, delta: int = 1) -> Optional[int]:
        fields = self._live_fields(key)
        if fields is None:
            return None
        value = int(fields.get(field, "0")) + delta
        fields[field] = str(value)
        return value

    async def expire(self, key: str, ttl_seconds: int) -> bool:
        fields = self._live_fields(key)
        if fields is None:
            return False
        self._data[key] = (fields, self._clock() + ttl_seconds)
        return True

    async def delete(self, key: str) -> bool:
        if self._live_fields(key) is None:
            return False
        del self._data[key]
        return True

    async def ping(self) -> bool:
        return True

    async def close(self) -> None:
        self._data.clear()
        self.logger.debug("Memory store cleared")

    def __len__(self) -> int:
        return sum(1 for key in list(self._data) if self._live_fields(key) is not None)
