"""Tests for slug generation."""

import random

from shortlinks.slugs import SlugGenerator
from shortlinks.common.validators import is_valid_slug


class TestSlugGenerator:
    """Test slug generation."""

    def test_default_length(self):
        generator = SlugGenerator()
        slug = generator.generate_random()

        assert len(slug) == 7
        assert is_valid_slug(slug)[0]

    def test_custom_length(self):
        generator = SlugGenerator(default_length=10)

        assert len(generator.generate_random()) == 10
        assert len(generator.generate_random(length=3)) == 3

    def test_prefixed(self):
        generator = SlugGenerator()
        slug = generator.generate_prefixed("qr", suffix_length=6)

        assert slug.startswith("qr")
        assert len(slug) == 8

    def test_alphabet(self):
        """The alphabet has 64 URL-safe symbols."""
        assert len(SlugGenerator.ALPHABET) == 64
        assert len(set(SlugGenerator.ALPHABET)) == 64
        assert is_valid_slug(SlugGenerator.ALPHABET)[0]

    def test_uniqueness(self):
        """Random slugs rarely collide."""
        generator = SlugGenerator()
        slugs = {generator.generate_random() for _ in range(1000)}
        assert len(slugs) == 1000

    def test_seeded_rng_is_deterministic(self):
        first = SlugGenerator(rng=random.Random(42)).generate_random()
        second = SlugGenerator(rng=random.Random(42)).generate_random()
        assert first == second
