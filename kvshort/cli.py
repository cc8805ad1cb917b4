#!/usr/bin/env python3
"""
Command-line client for the kvshort store.

Talks to the configured key/value store directly, without the HTTP server.

Usage:
    kvshort create <url> --key KEY
    kvshort resolve <slug>
    kvshort stats <slug> --key KEY
    kvshort update <slug> --key KEY --new-key NEW_KEY
    kvshort delete <slug> --key KEY
    kvshort health
"""

import argparse
import asyncio
import json
import sys
from typing import Optional

from config import load_config

from .exceptions import KVShortError, StoreError
from .service import RecordStore
from .slug import SlugGenerator
from .store import create_store
from .store.base import KeyValueStore
from .common.logging_config import setup_logging


def _emit(payload: dict, ok: bool = True) -> int:
    print(json.dumps({"success": ok, **payload}, indent=2), file=sys.stdout if ok else sys.stderr)
    return 0 if ok else 1


def _failure(e: Exception) -> int:
    if isinstance(e, StoreError):
        return _emit({"error": f"Store error during {e.operation}"}, ok=False)
    return _emit({"error": f"{type(e).__name__}: {e}"}, ok=False)


class KVShortCLI:
    """Command-line interface for kvshort."""

    def __init__(
        self,
        store_url: Optional[str] = None,
        key_prefix: str = "kvshort",
        slug_length: int = SlugGenerator.DEFAULT_LENGTH,
        verbose: bool = False,
        store: Optional[KeyValueStore] = None,
    ):
        """Initialize CLI."""
        self.logger = setup_logging(level="DEBUG" if verbose else "WARNING")
        self.store = store or create_store(store_url, logger=self.logger)
        self.service = RecordStore(
            store=self.store,
            generator=SlugGenerator(length=slug_length),
            logger=self.logger,
            key_prefix=key_prefix,
        )

    async def cleanup(self):
        """Cleanup resources."""
        await self.service.close()

    async def create(self, url: str, key: str) -> int:
        """Create a short link."""
        try:
            slug = await self.service.create(url, key)
        except KVShortError as e:
            return _failure(e)
        return _emit({"slug": slug, "url": url})

    async def resolve(self, slug: str) -> int:
        """Look up the target URL of a slug without counting an access."""
        try:
            record = await self.service.lookup(slug)
        except KVShortError as e:
            return _failure(e)
        return _emit({"slug": slug, "url": record.target_url})

    async def stats(self, slug: str, key: str) -> int:
        """Print the access count of a slug."""
        try:
            total = await self.service.get_stats(slug, key)
        except KVShortError as e:
            return _failure(e)
        return _emit({"slug": slug, "total_accesses": total})

    async def update(self, slug: str, key: str, new_key: str) -> int:
        """Replace the owner key of a slug."""
        try:
            await self.service.update(slug, key, new_key)
        except KVShortError as e:
            return _failure(e)
        return _emit({"slug": slug, "message": "Key updated"})

    async def delete(self, slug: str, key: str) -> int:
        """Delete a slug."""
        try:
            await self.service.delete(slug, key)
        except KVShortError as e:
            return _failure(e)
        return _emit({"slug": slug, "message": "Deleted"})

    async def health(self) -> int:
        """Check store health."""
        health = await self.service.health_check()
        return _emit({"health": health}, ok=health["overall"])


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kvshort",
        description="kvshort command-line client",
    )
    parser.add_argument("--store-url", help="Store URL (defaults to STORE_URL / .env)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    p = subparsers.add_parser("create", help="Shorten a URL")
    p.add_argument("url")
    p.add_argument("--key", required=True, help="Owner key")

    p = subparsers.add_parser("resolve", help="Show the target of a slug")
    p.add_argument("slug")

    p = subparsers.add_parser("stats", help="Show access count")
    p.add_argument("slug")
    p.add_argument("--key", required=True)

    p = subparsers.add_parser("update", help="Replace the owner key")
    p.add_argument("slug")
    p.add_argument("--key", required=True)
    p.add_argument("--new-key", required=True)

    p = subparsers.add_parser("delete", help="Delete a slug")
    p.add_argument("slug")
    p.add_argument("--key", required=True)

    subparsers.add_parser("health", help="Check store health")

    return parser


async def run(args: argparse.Namespace, cli: KVShortCLI) -> int:
    try:
        if args.command == "create":
            return await cli.create(args.url, args.key)
        if args.command == "resolve":
            return await cli.resolve(args.slug)
        if args.command == "stats":
            return await cli.stats(args.slug, args.key)
        if args.command == "update":
            return await cli.update(args.slug, args.key, args.new_key)
        if args.command == "delete":
            return await cli.delete(args.slug, args.key)
        return await cli.health()
    finally:
        await cli.cleanup()


def main(argv=None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    config = load_config()

    cli = KVShortCLI(
        store_url=args.store_url or config.store_url,
        key_prefix=config.key_prefix,
        slug_length=config.slug_length,
        verbose=args.verbose,
    )
    return asyncio.run(run(args, cli))


if __name__ == "__main__":
    sys.exit(main())
