"""Tests that many simultaneous requests are handled correctly.

Each request runs as its own task on the event loop and shares one store
handle. These tests assert that concurrent requests all succeed and that no
counter update is lost.
"""

import asyncio
import pytest


@pytest.mark.asyncio
class TestConcurrentRequests:
    """Concurrent requests against one app instance."""

    async def test_concurrent_creates(self, client, store):
        """Many concurrent POST / requests all get distinct slugs."""
        concurrency = 50
        tasks = [
            client.post("/", json={"key": f"key-{i}", "url": f"https://example.com/{i}"})
            for i in range(concurrency)
        ]
        responses = await asyncio.gather(*tasks)

        assert all(r.status_code == 201 for r in responses)
        slugs = {r.text for r in responses}
        assert len(slugs) == concurrency
        assert len(store) == concurrency

    async def test_concurrent_redirects_all_counted(self, client, service):
        """Concurrent redirects to one slug are each counted once."""
        response = await client.post("/", json={"key": "abc", "url": "https://example.com"})
        slug = response.text

        concurrency = 40
        responses = await asyncio.gather(*[client.get(f"/{slug}") for _ in range(concurrency)])
        await service.wait_for_pending()

        assert all(r.status_code == 308 for r in responses)
        stats = await client.get(f"/{slug}/stats", params={"key": "abc"})
        assert stats.json() == {"total_accesses": concurrency}

    async def test_concurrent_mixed_operations(self, client, service):
        """Redirects, stats and a key rotation interleave without errors."""
        response = await client.post("/", json={"key": "abc", "url": "https://example.com"})
        slug = response.text

        tasks = [client.get(f"/{slug}") for _ in range(20)]
        tasks += [client.get(f"/{slug}/stats", params={"key": "abc"}) for _ in range(5)]
        tasks.append(client.patch(f"/{slug}", params={"key": "abc"}, json={"key": "def"}))
        responses = await asyncio.gather(*tasks)
        await service.wait_for_pending()

        assert all(r.status_code == 308 for r in responses[:20])
        # Stats requests race the rotation; each sees one key or the other
        assert all(r.status_code in (200, 401) for r in responses[20:25])
        assert responses[-1].status_code == 200

        stats = await client.get(f"/{slug}/stats", params={"key": "def"})
        assert stats.json() == {"total_accesses": 20}
