"""Abstract base class for link store implementations."""

from abc import ABC, abstractmethod
from typing import Optional, List
from datetime import datetime

from .models import Link


class LinkStoreBase(ABC):
    """Abstract base class for slug-keyed link storage.

    Implementations must enforce slug uniqueness inside the storage layer
    and make ``record_visit`` a single atomic update-and-fetch.
    """

    #: Short backend name reported by the health endpoint
    backend = "abstract"

    @abstractmethod
    async def connect(self) -> None:
        """Open connections and prepare the schema.

        Raises:
            StorageError: If the backend is unreachable
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close connections."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the backend is healthy.

        Returns:
            True if healthy, False otherwise
        """
        pass

    @abstractmethod
    async def insert_link(self, slug: str, url: str, created_at: datetime) -> bool:
        """Insert a new link unless the slug is taken.

        Args:
            slug: The slug to claim
            url: Destination URL
            created_at: Creation timestamp

        Returns:
            True if inserted, False if the slug already exists
        """
        pass

    @abstractmethod
    async def insert_links(self, slugs: List[str], url: str, created_at: datetime) -> List[str]:
        """Insert many links pointing at the same URL.

        Insertion is unordered; slugs that collide are skipped rather than
        aborting the batch.

        Args:
            slugs: Candidate slugs
            url: Destination URL shared by every link
            created_at: Creation timestamp

        Returns:
            Slugs actually inserted
        """
        pass

    @abstractmethod
    async def get_link(self, slug: str) -> Optional[Link]:
        """Get a link without touching its visit counter.

        Args:
            slug: The slug to look up

        Returns:
            The link or None if not found
        """
        pass

    @abstractmethod
    async def count_links(self) -> int:
        """Return the total number of links."""
        pass

    @abstractmethod
    async def list_links(self, offset: int = 0, limit: int = 100) -> List[Link]:
        """List links, most recently created first.

        Args:
            offset: Number of links to skip
            limit: Maximum number of links to return

        Returns:
            List of links
        """
        pass

    @abstractmethod
    async def delete_link(self, slug: str) -> bool:
        """Delete a link.

        Args:
            slug: The slug to delete

        Returns:
            True if deleted, False if not found
        """
        pass

    @abstractmethod
    async def delete_links_by_url(self, url: str) -> int:
        """Delete every link whose URL equals ``url`` exactly.

        Returns:
            Number of links removed
        """
        pass

    @abstractmethod
    async def record_visit(self, slug: str, visited_at: datetime) -> Optional[str]:
        """Atomically increment visits, set the last visit time and fetch the URL.

        Args:
            slug: The slug being visited
            visited_at: Visit timestamp

        Returns:
            The destination URL, or None if the slug does not exist
        """
        pass
