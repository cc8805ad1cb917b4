#!/usr/bin/env python3
"""
Main entry point for the kvshort service.

Concurrency: each request runs as its own task on the event loop; the store
handle on app.state is shared by all of them. Set WORKERS > 1 for
multi-process scaling (each worker opens its own store connection pool).

Usage:
    python app.py

Environment variables:
    STORE_URL - Key/value store URL (redis://... or memory://)
    KEY_PREFIX - Namespace for store keys
    STORE_TIMEOUT_SECONDS - Per-call store timeout
    IDLE_TTL_SECONDS - Expire links unused for this long (0 disables)
    PORT - Port to listen on
    WORKERS - Number of uvicorn worker processes (default 1)
    LOG_LEVEL - Logging level
"""

import signal
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from config import load_config
from kvshort.service import RecordStore
from kvshort.slug import SlugGenerator
from kvshort.store import create_store
from kvshort.common.logging_config import setup_logging
from web_app import create_app


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown."""
    config = app.state.config
    logger = app.state.logger

    logger.info("Starting kvshort service...")

    store = create_store(
        config.store_url,
        timeout_seconds=config.store_timeout_seconds,
        logger=logger,
    )
    if not await store.ping():
        logger.warning(f"Store at {config.store_url} is not reachable yet")

    service = RecordStore(
        store=store,
        generator=SlugGenerator(length=config.slug_length),
        logger=logger,
        key_prefix=config.key_prefix,
        idle_ttl_seconds=config.idle_ttl_seconds,
        max_key_bytes=config.max_key_bytes,
    )
    if config.idle_ttl_seconds:
        logger.info(f"Links expire after {config.idle_ttl_seconds}s without a redirect")

    app.state.store = store
    app.state.service = service

    logger.info("Service started successfully")

    yield

    logger.info("Shutting down kvshort service...")
    await service.close()
    logger.info("Service stopped")


def main():
    """Main entry point."""
    config = load_config()

    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    logger.info("kvshort URL shortener")
    logger.info(f"Configuration: {config.model_dump()}")

    # Store and service are created in lifespan
    app = create_app(
        store_instance=None,
        service_instance=None,
        config=config,
    )
    app.state.logger = logger
    app.router.lifespan_context = lifespan

    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        workers=config.workers,
        log_level=config.log_level.lower(),
        access_log=False,
    )

    server = uvicorn.Server(uvicorn_config)

    def handle_signal(signum, frame):
        logger.info(f"Received signal {signum}, initiating graceful shutdown...")
        server.should_exit = True

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    try:
        logger.info(f"Starting server on {config.host}:{config.port}")
        server.run()
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
