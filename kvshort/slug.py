"""Slug generation utilities."""

import string
from typing import Optional

from nanoid import generate


class SlugGenerator:
    """Generate random URL-safe slugs."""

    # nanoid default alphabet (64 symbols, URL-safe)
    ALPHABET = "_-" + string.digits + string.ascii_letters
    DEFAULT_LENGTH = 21

    def __init__(self, length: int = DEFAULT_LENGTH):
        """Initialize slug generator.

        Args:
            length: Length of generated slugs
        """
        if length < 1:
            raise ValueError("Slug length must be positive")
        self.length = length

    def generate(self, length: Optional[int] = None) -> str:
        """Generate a random slug.

        Collisions with existing slugs are not checked; at 21 symbols of a
        64-symbol alphabet the probability is negligible.

        Args:
            length: Length of the slug (uses configured length if not specified)

        Returns:
            Random slug
        """
        return generate(self.ALPHABET, length or self.length)
