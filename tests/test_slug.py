"""Tests for slug generation."""

import pytest
from kvshort.common.validators import is_valid_slug
from kvshort.slug import SlugGenerator


class TestSlugGenerator:
    """Test slug generation."""

    def test_alphabet_is_url_safe(self):
        """The alphabet has 64 distinct URL-safe symbols."""
        assert len(SlugGenerator.ALPHABET) == 64
        assert len(set(SlugGenerator.ALPHABET)) == 64
        assert all(c.isalnum() or c in "-_" for c in SlugGenerator.ALPHABET)

    def test_generate_default_length(self):
        """Test default slug length."""
        generator = SlugGenerator()

        slug = generator.generate()
        assert len(slug) == 21
        assert is_valid_slug(slug, generator.length)[0]

    def test_generate_custom_length(self):
        """Test configured slug length."""
        generator = SlugGenerator(length=10)

        slug = generator.generate()
        assert len(slug) == 10
        assert is_valid_slug(slug, generator.length)[0]

    def test_generate_unique(self):
        """Generated slugs do not repeat in practice."""
        generator = SlugGenerator()

        slugs = {generator.generate() for _ in range(1000)}
        assert len(slugs) == 1000

    def test_invalid_length_rejected(self):
        """Test non-positive lengths."""
        with pytest.raises(ValueError):
            SlugGenerator(length=0)

    def test_generated_slugs_use_alphabet(self):
        """Every generated symbol comes from the alphabet."""
        generator = SlugGenerator(length=64)

        for _ in range(100):
            assert set(generator.generate()) <= set(SlugGenerator.ALPHABET)
