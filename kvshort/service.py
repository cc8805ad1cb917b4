"""Link record store: slug -> target URL, owner key and access counter.

Each record lives under one store key as a field mapping, so creation and
deletion are single atomic store calls. Reads that find an incomplete
record treat it as missing.

Redirect lookups count accesses in a background task. The count may lag the
redirect or be lost if the process dies first; a failed increment is logged
and never fails the redirect.
"""

import asyncio
import hmac
import logging
from typing import Optional, Dict, Set

from .exceptions import (
    RecordNotFoundError,
    StoreError,
    UnauthorizedError,
    ValidationError,
)
from .models import Record, KEY_FIELD, STATS_FIELD
from .slug import SlugGenerator
from .store.base import KeyValueStore
from .common.validators import is_valid_url, is_valid_slug, is_valid_key, MAX_KEY_BYTES


def keys_match(stored_key: str, presented_key: str) -> bool:
    """Compare owner keys in constant time."""
    return hmac.compare_digest(stored_key.encode("utf-8"), presented_key.encode("utf-8"))


class RecordStore:
    """Service layer for creating, resolving and managing link records."""

    def __init__(
        self,
        store: KeyValueStore,
        generator: Optional[SlugGenerator] = None,
        logger: Optional[logging.Logger] = None,
        key_prefix: str = "kvshort",
        idle_ttl_seconds: int = 0,
        max_key_bytes: int = MAX_KEY_BYTES,
    ):
        """Initialize record store.

        Args:
            store: Key/value store backend
            generator: Optional slug generator
            logger: Optional logger
            key_prefix: Namespace for store keys
            idle_ttl_seconds: Expire records not redirected to for this long (0 disables)
            max_key_bytes: Maximum UTF-8 length of owner keys
        """
        self.store = store
        self.generator = generator or SlugGenerator()
        self.logger = logger or logging.getLogger(__name__)
        self.key_prefix = key_prefix
        self.idle_ttl_seconds = idle_ttl_seconds
        self.max_key_bytes = max_key_bytes
        self._pending: Set[asyncio.Task] = set()

    def record_key(self, slug: str) -> str:
        """Store key holding the record for a slug."""
        return f"{self.key_prefix}:link:{slug}"

    async def create(self, target_url: str, key: str) -> str:
        """Create a record and return its new slug.

        Raises:
            ValidationError: If the URL or key is malformed
            StoreError: If the record could not be written
        """
        is_valid, error = is_valid_url(target_url)
        if not is_valid:
            raise ValidationError(f"Invalid URL: {error}")
        self._check_key(key)

        slug = self.generator.generate()
        record = Record(slug=slug, target_url=target_url, owner_key=key)

        try:
            await self.store.set(
                self.record_key(slug),
                record.to_mapping(),
                ttl_seconds=self.idle_ttl_seconds or None,
            )
        except StoreError as e:
            self.logger.error(f"create: {e}")
            raise

        self.logger.info(f"Created link {slug} -> {target_url}")
        return slug

    async def resolve(self, slug: str) -> str:
        """Return the target URL for a slug and count the access.

        Raises:
            ValidationError: If the slug is malformed
            RecordNotFoundError: If the slug is unknown
            StoreError: If the lookup failed
        """
        record = await self.lookup(slug, operation="resolve")

        task = asyncio.create_task(self._record_access(slug))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

        return record.target_url

    async def lookup(self, slug: str, operation: str = "lookup") -> Record:
        """Return the complete record for a slug without counting an access.

        Raises:
            ValidationError: If the slug is malformed
            RecordNotFoundError: If the slug is unknown or its record is incomplete
            StoreError: If the lookup failed
        """
        self._check_slug(slug)
        record = Record.from_mapping(slug, await self._fetch(operation, slug))
        if record is None:
            self.logger.debug(f"Slug not found: {slug}")
            raise RecordNotFoundError(slug)
        return record

    async def get_stats(self, slug: str, key: str) -> int:
        """Return the access count for a slug.

        Raises:
            ValidationError: If the slug or key is malformed
            RecordNotFoundError: If the slug is unknown or its counter is missing
            UnauthorizedError: If the key does not match
            StoreError: If the lookup failed
        """
        fields = await self._authorize("get_stats", slug, key)
        record = Record.from_mapping(slug, fields)
        if record is None:
            raise RecordNotFoundError(slug)
        return record.access_count

    async def update(self, slug: str, key: str, new_key: str) -> None:
        """Replace the owner key of a record.

        Only the key changes; target URL and counter are left as they are.

        Raises:
            ValidationError: If the slug or either key is malformed
            RecordNotFoundError: If the slug is unknown
            UnauthorizedError: If the key does not match
            StoreError: If the store call failed
        """
        self._check_key(new_key)
        fields = await self._authorize("update", slug, key)
        if Record.from_mapping(slug, fields) is None:
            raise RecordNotFoundError(slug)

        try:
            written = await self.store.set_field_if_exists(
                self.record_key(slug), KEY_FIELD, new_key
            )
        except StoreError as e:
            self.logger.error(f"update: {e}")
            raise

        # Deleted between the read and the write
        if not written:
            raise RecordNotFoundError(slug)

        self.logger.info(f"Rotated key for {slug}")

    async def delete(self, slug: str, key: str) -> None:
        """Delete a record with all of its fields.

        Raises:
            ValidationError: If the slug or key is malformed
            RecordNotFoundError: If the slug is unknown
            UnauthorizedError: If the key does not match
            StoreError: If the store call failed
        """
        fields = await self._authorize("delete", slug, key)
        if Record.from_mapping(slug, fields) is None:
            raise RecordNotFoundError(slug)

        try:
            deleted = await self.store.delete(self.record_key(slug))
        except StoreError as e:
            self.logger.error(f"delete: {e}")
            raise

        if not deleted:
            raise RecordNotFoundError(slug)

        self.logger.info(f"Deleted link {slug}")

    async def health_check(self) -> Dict[str, bool]:
        """Perform health check.

        Returns:
            Dictionary with health status
        """
        store_healthy = await self.store.ping()
        return {
            "store": store_healthy,
            "overall": store_healthy,
        }

    async def wait_for_pending(self) -> None:
        """Wait until in-flight access counter updates have finished."""
        while self._pending:
            await asyncio.gather(*list(self._pending))

    async def close(self) -> None:
        """Flush pending counter updates and close the store."""
        await self.wait_for_pending()
        await self.store.close()

    async def _fetch(self, operation: str, slug: str) -> Optional[Dict[str, str]]:
        try:
            return await self.store.get(self.record_key(slug))
        except StoreError as e:
            self.logger.error(f"{operation}: {e}")
            raise

    async def _authorize(self, operation: str, slug: str, key: str) -> Dict[str, str]:
        """Load a record's fields and check the presented key against its owner key."""
        self._check_slug(slug)
        self._check_key(key, allow_empty=True)

        fields = await self._fetch(operation, slug)
        stored_key = fields.get(KEY_FIELD) if fields else None
        if stored_key is None:
            raise RecordNotFoundError(slug)

        if not keys_match(stored_key, key):
            self.logger.info(f"{operation}: key mismatch for {slug}")
            raise UnauthorizedError(slug)

        return fields

    async def _record_access(self, slug: str) -> None:
        store_key = self.record_key(slug)
        try:
            count = await self.store.increment(store_key, STATS_FIELD, 1)
            if count is None:
                self.logger.debug(f"Record {slug} disappeared before its access was counted")
                return
            if self.idle_ttl_seconds:
                await self.store.expire(store_key, self.idle_ttl_seconds)
        except Exception as e:
            self.logger.warning(f"resolve: access not counted for {slug}: {e}")

    def _check_slug(self, slug: str) -> None:
        is_valid, error = is_valid_slug(slug, self.generator.length)
        if not is_valid:
            raise ValidationError(f"Invalid slug: {error}")

    def _check_key(self, key: str, allow_empty: bool = False) -> None:
        is_valid, error = is_valid_key(key, self.max_key_bytes, allow_empty=allow_empty)
        if not is_valid:
            raise ValidationError(f"Invalid key: {error}")
