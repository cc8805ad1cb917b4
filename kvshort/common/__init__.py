"""Common utilities for kvshort."""

from .validators import is_valid_url, is_valid_slug, is_valid_key
from .logging_config import setup_logging

__all__ = [
    "is_valid_url",
    "is_valid_slug",
    "is_valid_key",
    "setup_logging",
]
