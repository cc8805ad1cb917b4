"""Redis implementation of the key/value store."""

import functools
import logging
from typing import Optional, Dict

import redis.asyncio as redis
from redis.exceptions import RedisError

from ..exceptions import StoreError
from .base import KeyValueStore


# Both scripts touch a single key, so they run atomically on the server.
INCREMENT_IF_EXISTS_SCRIPT = """
if redis.call('EXISTS', KEYS[1]) == 1 then
    return redis.call('HINCRBY', KEYS[1], ARGV[1], ARGV[2])
end
return false
"""

SET_FIELD_IF_EXISTS_SCRIPT = """
if redis.call('EXISTS', KEYS[1]) == 1 then
    redis.call('HSET', KEYS[1], ARGV[1], ARGV[2])
    return 1
end
return 0
"""


def wrap_redis_errors(method):
    """Convert redis errors raised by a store method into StoreError."""

    @functools.wraps(method)
    async def wrapper(self, *args, **kwargs):
        try:
            return await method(self, *args, **kwargs)
        except RedisError as e:
            raise StoreError(method.__name__, f"{type(e).__name__}: {e}") from e

    return wrapper


class RedisStore(KeyValueStore):
    """Key/value store backed by Redis hashes."""

    def __init__(
        self,
        store_url: str,
        timeout_seconds: Optional[float] = 5.0,
        logger: Optional[logging.Logger] = None,
        client: Optional[redis.Redis] = None,
    ):
        """Initialize Redis store.

        Args:
            store_url: Redis connection URL (e.g., redis://localhost:6379/0)
            timeout_seconds: Per-call socket timeout, None to wait forever
            logger: Optional logger instance
            client: Optional pre-built client (mainly for tests)
        """
        super().__init__(store_url)
        self.timeout_seconds = timeout_seconds
        self.logger = logger or logging.getLogger(__name__)
        self.client = client or redis.from_url(
            store_url,
            encoding="utf-8",
            decode_responses=True,
            socket_timeout=timeout_seconds,
            socket_connect_timeout=timeout_seconds,
        )

    @wrap_redis_errors
    async def get(self, key: str) -> Optional[Dict[str, str]]:
        mapping = await self.client.hgetall(key)
        return mapping or None

    @wrap_redis_errors
    async def set(
        self,
        key: str,
        mapping: Dict[str, str],
        ttl_seconds: Optional[int] = None,
    ) -> None:
        # MULTI/EXEC so the fields and the expiry land together
        async with self.client.pipeline(transaction=True) as pipe:
            pipe.delete(key)
            pipe.hset(key, mapping=mapping)
            if ttl_seconds:
                pipe.expire(key, ttl_seconds)
            await pipe.execute()

    @wrap_redis_errors
    async def set_field_if_exists(self, key: str, field: str, value: str) -> bool:
        result = await self.client.eval(SET_FIELD_IF_EXISTS_SCRIPT, 1, key, field, value)
        return bool(result)

    @wrap_redis_errors
    async def increment(self, key: str, field: str, delta: int = 1) -> Optional[int]:
        result = await self.client.eval(INCREMENT_IF_EXISTS_SCRIPT, 1, key, field, delta)
        return None if result is None else int(result)

    @wrap_redis_errors
    async def expire(self, key: str, ttl_seconds: int) -> bool:
        return bool(await self.client.expire(key, ttl_seconds))

    @wrap_redis_errors
    async def delete(self, key: str) -> bool:
        return await self.client.delete(key) > 0

    async def ping(self) -> bool:
        try:
            return bool(await self.client.ping())
        except RedisError as e:
            self.logger.error(f"Redis ping failed: {e}")
            return False

    async def close(self) -> None:
        await self.client.aclose()
        self.logger.info("Redis connection closed")
