"""Store factory: pick the key/value backend from the connection URL.

Supported schemes
-----------------
- ``redis://``, ``rediss://``, ``unix://``: RedisStore
- ``memory://``: MemoryStore (process-local, lost on restart)
"""

import logging
from typing import Optional
from urllib.parse import urlparse

from .base import KeyValueStore
from .memory import MemoryStore
from .redis_store import RedisStore

REDIS_SCHEMES = {"redis", "rediss", "unix"}


def create_store(
    store_url: str,
    timeout_seconds: Optional[float] = 5.0,
    logger: Optional[logging.Logger] = None,
) -> KeyValueStore:
    """Return a store instance for the given connection URL.

    Args:
        store_url: Connection URL, e.g. redis://localhost:6379/0 or memory://
        timeout_seconds: Per-call timeout for network backends
        logger: Optional logger instance

    Raises:
        ValueError: If the URL scheme is not supported
    """
    scheme = urlparse(store_url).scheme.lower()

    if scheme in REDIS_SCHEMES:
        return RedisStore(store_url, timeout_seconds=timeout_seconds, logger=logger)

    if scheme == "memory":
        return MemoryStore(store_url, logger=logger)

    raise ValueError(f"Unknown store backend: {scheme!r}")
