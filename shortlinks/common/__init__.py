"""Common utilities for shortlinks."""

from .validators import is_valid_url, is_valid_slug, is_valid_prefix
from .url_builder import build_short_url
from .logging_config import setup_logging, get_logger

__all__ = [
    "is_valid_url",
    "is_valid_slug",
    "is_valid_prefix",
    "build_short_url",
    "setup_logging",
    "get_logger",
]
