"""Validation utilities for slugs, keys and URLs."""

from urllib.parse import urlparse
from typing import Tuple

from ..slug import SlugGenerator

MAX_URL_LENGTH = 2048
MAX_KEY_BYTES = 64


def _encodes_as_utf8(value: str) -> bool:
    # Lone surrogates decode from JSON escapes but cannot be stored or echoed
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def is_valid_url(url: str) -> Tuple[bool, str]:
    """Validate a target URL.

    Args:
        url: The URL to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not url or not isinstance(url, str):
        return False, "URL is required"

    if not _encodes_as_utf8(url):
        return False, "URL must be valid UTF-8"

    if len(url) > MAX_URL_LENGTH:
        return False, f"URL is too long (max {MAX_URL_LENGTH} characters)"

    if any(c.isspace() for c in url):
        return False, "URL must not contain whitespace"

    try:
        result = urlparse(url)
        # Accessing port raises on malformed values like host:abc
        result.port
    except ValueError as e:
        return False, f"Invalid URL format: {e}"

    if not result.scheme:
        return False, "URL must be absolute (missing scheme)"

    if not result.hostname:
        return False, "URL must have a valid host"

    return True, ""


def is_valid_slug(slug: str, length: int = SlugGenerator.DEFAULT_LENGTH) -> Tuple[bool, str]:
    """Validate a slug's length and alphabet.

    Args:
        slug: The slug to validate
        length: Exact expected length

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not slug or not isinstance(slug, str):
        return False, "Slug is required"

    if len(slug) != length:
        return False, f"Slug must be exactly {length} characters"

    if not all(c in SlugGenerator.ALPHABET for c in slug):
        return False, "Slug can only contain letters, numbers, hyphens, and underscores"

    return True, ""


def is_valid_key(
    key: str,
    max_bytes: int = MAX_KEY_BYTES,
    allow_empty: bool = False,
) -> Tuple[bool, str]:
    """Validate an owner key by its UTF-8 encoded length.

    Args:
        key: The key to validate
        max_bytes: Maximum encoded length
        allow_empty: Accept an empty key (presented keys may be empty)

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not isinstance(key, str):
        return False, "Key must be a string"

    if not key and not allow_empty:
        return False, "Key is required"

    if not _encodes_as_utf8(key):
        return False, "Key must be valid UTF-8"

    if len(key.encode("utf-8")) > max_bytes:
        return False, f"Key must be at most {max_bytes} bytes"

    return True, ""
