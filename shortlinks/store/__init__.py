"""Storage layer for shortlinks."""

from .base import LinkStoreBase
from .models import Link
from .json_file import JSONFileLinkStore
from .factory import create_store

__all__ = ["LinkStoreBase", "Link", "JSONFileLinkStore", "create_store"]
