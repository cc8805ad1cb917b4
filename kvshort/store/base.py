"""Abstract base class for key/value store backends."""

from abc import ABC, abstractmethod
from typing import Optional, Dict


class KeyValueStore(ABC):
    """Abstract base class for key/value store operations.

    Every operation touches exactly one key and is atomic on its own.
    There are no multi-key transactions.
    """

    def __init__(self, store_url: str):
        """Initialize store.

        Args:
            store_url: Store connection string
        """
        self.store_url = store_url

    @abstractmethod
    async def get(self, key: str) -> Optional[Dict[str, str]]:
        """Get all fields stored under a key.

        Args:
            key: The key to lookup

        Returns:
            Field mapping if the key exists, None otherwise
        """
        pass

    @abstractmethod
    async def set(
        self,
        key: str,
        mapping: Dict[str, str],
        ttl_seconds: Optional[int] = None,
    ) -> None:
        """Write all fields of a key in a single atomic call.

        Args:
            key: The key to write
            mapping: Field names and values
            ttl_seconds: Optional expiry for the key
        """
        pass

    @abstractmethod
    async def set_field_if_exists(self, key: str, field: str, value: str) -> bool:
        """Overwrite one field, only if the key exists.

        Args:
            key: The key to update
            field: Field name
            value: New field value

        Returns:
            True if written, False if the key does not exist
        """
        pass

    @abstractmethod
    async def increment(self, key: str, field: str, delta: int = 1) -> Optional[int]:
        """Increment an integer field, only if the key exists.

        Args:
            key: The key to update
            field: Counter field name
            delta: Amount to add

        Returns:
            New counter value, or None if the key does not exist
        """
        pass

    @abstractmethod
    async def expire(self, key: str, ttl_seconds: int) -> bool:
        """Set or refresh the expiry of a key.

        Returns:
            True if the key exists and the expiry was set
        """
        pass

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Delete a key with all its fields.

        Returns:
            True if deleted, False if not found
        """
        pass

    @abstractmethod
    async def ping(self) -> bool:
        """Check if the store is reachable."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close store connections."""
        pass
