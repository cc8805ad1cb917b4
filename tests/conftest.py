"""Pytest configuration and fixtures."""

import pytest
from typing import AsyncGenerator

from httpx import AsyncClient, ASGITransport

from config import Config
from kvshort.service import RecordStore
from kvshort.slug import SlugGenerator
from kvshort.store.memory import MemoryStore
from kvshort.common.logging_config import setup_logging
from web_app import create_app


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def clock():
    """Create a fake clock for expiry tests."""
    return FakeClock()


@pytest.fixture
def store(logger, clock) -> MemoryStore:
    """Create in-memory store."""
    return MemoryStore(logger=logger, clock=clock)


@pytest.fixture
def slug_generator():
    """Create slug generator."""
    return SlugGenerator()


@pytest.fixture
async def service(store, slug_generator, logger) -> AsyncGenerator[RecordStore, None]:
    """Create service instance."""
    service = RecordStore(
        store=store,
        generator=slug_generator,
        logger=logger,
        key_prefix="test",
    )

    yield service

    await service.wait_for_pending()


@pytest.fixture
def config():
    """Create test configuration."""
    return Config(store_url="memory://", key_prefix="test")


@pytest.fixture
def app(store, service, config):
    """Create test FastAPI app."""
    return create_app(
        store_instance=store,
        service_instance=service,
        config=config,
    )


@pytest.fixture
async def client(app):
    """Create test client."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com",
        "https://github.com/user/repo",
        "http://stackoverflow.com/questions/123456?tab=votes#answer",
    ]
