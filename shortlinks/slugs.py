"""Slug generation utilities."""

import random
import string
from typing import Optional


class SlugGenerator:
    """Generate random URL-safe slugs."""

    # nanoid alphabet: 64 URL-safe symbols
    ALPHABET = string.ascii_letters + string.digits + "_-"

    def __init__(self, default_length: int = 7, rng: Optional[random.Random] = None):
        """Initialize slug generator.

        Args:
            default_length: Length of slugs generated without a prefix
            rng: Optional random source (defaults to the OS entropy source)
        """
        self.default_length = default_length
        self.rng = rng or random.SystemRandom()

    def generate_random(self, length: Optional[int] = None) -> str:
        """Generate a random slug.

        Args:
            length: Length of the slug (uses default if not specified)

        Returns:
            Random slug
        """
        length = length or self.default_length
        return ''.join(self.rng.choices(self.ALPHABET, k=length))

    def generate_prefixed(self, prefix: str, suffix_length: int = 6) -> str:
        """Generate a slug made of a fixed prefix and a random suffix.

        Args:
            prefix: Fixed leading part
            suffix_length: Length of the random part

        Returns:
            Prefixed slug
        """
        return f"{prefix}{self.generate_random(suffix_length)}"
