"""Key/value store layer."""

from .base import KeyValueStore
from .memory import MemoryStore
from .redis_store import RedisStore
from .factory import create_store

__all__ = ["KeyValueStore", "MemoryStore", "RedisStore", "create_store"]
