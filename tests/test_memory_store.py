"""Tests for the in-memory store."""

import pytest


class TestMemoryStore:
    """Test in-memory store semantics."""

    @pytest.mark.asyncio
    async def test_set_and_get(self, store):
        """Test round trip of a field mapping."""
        await store.set("k", {"url": "https://example.com", "stats": 0})

        assert await store.get("k") == {"url": "https://example.com", "stats": "0"}
        assert await store.get("other") is None

    @pytest.mark.asyncio
    async def test_get_returns_copy(self, store):
        """Mutating a returned mapping does not change the store."""
        await store.set("k", {"url": "u"})

        fields = await store.get("k")
        fields["url"] = "changed"

        assert (await store.get("k"))["url"] == "u"

    @pytest.mark.asyncio
    async def test_set_replaces_all_fields(self, store):
        """A second set replaces the previous mapping."""
        await store.set("k", {"url": "u", "key": "a"})
        await store.set("k", {"url": "v"})

        assert await store.get("k") == {"url": "v"}

    @pytest.mark.asyncio
    async def test_increment(self, store):
        """Test conditional increment."""
        await store.set("k", {"stats": "0"})

        assert await store.increment("k", "stats") == 1
        assert await store.increment("k", "stats", 5) == 6
        assert await store.increment("missing", "stats") is None
        assert await store.get("missing") is None

    @pytest.mark.asyncio
    async def test_set_field_if_exists(self, store):
        """Test conditional field write."""
        await store.set("k", {"key": "a"})

        assert await store.set_field_if_exists("k", "key", "b") is True
        assert (await store.get("k"))["key"] == "b"
        assert await store.set_field_if_exists("missing", "key", "b") is False
        assert await store.get("missing") is None

    @pytest.mark.asyncio
    async def test_delete(self, store):
        """Test delete results."""
        await store.set("k", {"url": "u"})

        assert await store.delete("k") is True
        assert await store.delete("k") is False
        assert await store.get("k") is None

    @pytest.mark.asyncio
    async def test_ttl_expiry(self, store, clock):
        """Keys vanish once their TTL passes."""
        await store.set("k", {"url": "u"}, ttl_seconds=10)

        clock.advance(9)
        assert await store.get("k") is not None

        clock.advance(1)
        assert await store.get("k") is None
        assert await store.increment("k", "stats") is None
        assert len(store) == 0

    @pytest.mark.asyncio
    async def test_expire_refresh(self, store, clock):
        """Test refreshing expiry."""
        await store.set("k", {"url": "u"}, ttl_seconds=10)

        clock.advance(8)
        assert await store.expire("k", 10) is True

        clock.advance(8)
        assert await store.get("k") is not None
        assert await store.expire("missing", 10) is False

    @pytest.mark.asyncio
    async def test_ping_and_close(self, store):
        """Test ping and close."""
        await store.set("k", {"url": "u"})

        assert await store.ping() is True
        await store.close()
        assert len(store) == 0
