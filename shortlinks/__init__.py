"""Core business logic for shortlinks."""

from .slugs import SlugGenerator
from .service import LinkService

__all__ = ["SlugGenerator", "LinkService"]
