"""Business logic service for shortlinks."""

import math
import logging
from typing import Optional, Dict, Any
from datetime import datetime, timezone

from .slugs import SlugGenerator
from .store.base import LinkStoreBase
from .common.validators import is_valid_url, is_valid_slug, is_valid_prefix
from .common.url_builder import build_short_url
from .errors import (
    InvalidLinkError,
    SlugExistsError,
    LinkNotFoundError,
    SlugGenerationError,
)


def _parse_positive_int(value, default: int) -> int:
    """Parse a page/limit value, falling back to ``default`` when missing or invalid."""
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number >= 1 else default


class LinkService:
    """Service layer for link management and redirects."""

    def __init__(
        self,
        store: LinkStoreBase,
        base_url: str,
        slug_generator: Optional[SlugGenerator] = None,
        logger: Optional[logging.Logger] = None,
        max_slug_retries: int = 5,
        bulk_suffix_length: int = 6,
        bulk_max_count: int = 5000,
        list_default_limit: int = 100,
        list_max_limit: int = 1000,
    ):
        """Initialize link service.

        Args:
            store: Link store backend
            base_url: Externally visible base URL used to build short links
            slug_generator: Optional slug generator
            logger: Optional logger
            max_slug_retries: Attempts at finding a free random slug
            bulk_suffix_length: Random suffix length for prefixed bulk slugs
            bulk_max_count: Largest accepted bulk request
            list_default_limit: Page size when none is given
            list_max_limit: Largest accepted page size
        """
        self.store = store
        self.base_url = base_url
        self.generator = slug_generator or SlugGenerator()
        self.logger = logger or logging.getLogger(__name__)
        self.max_slug_retries = max_slug_retries
        self.bulk_suffix_length = bulk_suffix_length
        self.bulk_max_count = bulk_max_count
        self.list_default_limit = list_default_limit
        self.list_max_limit = list_max_limit

    @classmethod
    def from_config(cls, store: LinkStoreBase, config, logger: Optional[logging.Logger] = None) -> "LinkService":
        """Build a service for ``store`` using the slug and limit settings of ``config``."""
        return cls(
            store=store,
            base_url=config.base_url,
            slug_generator=SlugGenerator(default_length=config.slug_length),
            logger=logger,
            max_slug_retries=config.max_slug_retries,
            bulk_suffix_length=config.bulk_suffix_length,
            bulk_max_count=config.bulk_max_count,
            list_default_limit=config.list_default_limit,
            list_max_limit=config.list_max_limit,
        )

    def short_url(self, slug: str) -> str:
        """Build the short link for ``slug``."""
        return build_short_url(slug, self.base_url)

    async def create_link(self, url: Optional[str], slug: Optional[str] = None) -> Dict[str, Any]:
        """Create a link, generating a slug when none is given.

        Args:
            url: Destination URL
            slug: Optional caller-chosen slug

        Returns:
            Dictionary with short, slug, url

        Raises:
            InvalidLinkError: If the URL is missing or the slug is malformed
            SlugExistsError: If the chosen slug is taken
            SlugGenerationError: If no free random slug was found
        """
        is_valid, error = is_valid_url(url)
        if not is_valid:
            raise InvalidLinkError(error)

        created_at = datetime.now(timezone.utc)

        if slug:
            is_valid, error = is_valid_slug(slug)
            if not is_valid:
                raise InvalidLinkError(f"Invalid slug: {error}")

            if not await self.store.insert_link(slug, url, created_at):
                raise SlugExistsError(f"Slug '{slug}' already exists")
        else:
            slug = await self._insert_random_slug(url, created_at)

        self.logger.info(f"Created link: {slug} -> {url}")

        return {"short": self.short_url(slug), "slug": slug, "url": url}

    async def _insert_random_slug(self, url: str, created_at: datetime) -> str:
        """Insert ``url`` under a fresh random slug, retrying on collision."""
        for attempt in range(self.max_slug_retries):
            slug = self.generator.generate_random()
            if await self.store.insert_link(slug, url, created_at):
                if attempt:
                    self.logger.debug(f"Generated slug after {attempt + 1} attempts: {slug}")
                return slug

        raise SlugGenerationError(
            f"Unable to generate a unique slug after {self.max_slug_retries} attempts"
        )

    async def bulk_create(
        self,
        url: Optional[str],
        count: int = 10,
        prefix: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Create ``count`` links with random slugs that all point at ``url``.

        Colliding slugs are skipped, so fewer than ``count`` links may be created.

        Args:
            url: Destination URL
            count: Number of links to generate
            prefix: Optional fixed slug prefix

        Returns:
            Dictionary with total, url and links (list of {short, slug})

        Raises:
            InvalidLinkError: If the URL is missing, count is out of range or the prefix is malformed
        """
        is_valid, error = is_valid_url(url)
        if not is_valid:
            raise InvalidLinkError(error)

        if count > self.bulk_max_count:
            raise InvalidLinkError(f"At most {self.bulk_max_count} links per request")
        if count < 1:
            raise InvalidLinkError("Count must be at least 1")

        is_valid, error = is_valid_prefix(prefix)
        if not is_valid:
            raise InvalidLinkError(f"Invalid prefix: {error}")

        if prefix:
            candidates = [
                self.generator.generate_prefixed(prefix, self.bulk_suffix_length)
                for _ in range(count)
            ]
        else:
            candidates = [self.generator.generate_random() for _ in range(count)]

        # Drop in-batch duplicates, keep generation order
        unique = list(dict.fromkeys(candidates))

        created_at = datetime.now(timezone.utc)
        inserted = await self.store.insert_links(unique, url, created_at)

        if len(inserted) < count:
            self.logger.warning(f"Bulk create for {url}: {count - len(inserted)} slugs collided and were skipped")
        self.logger.info(f"Bulk created {len(inserted)} links -> {url}")

        return {
            "total": len(inserted),
            "url": url,
            "links": [{"short": self.short_url(slug), "slug": slug} for slug in inserted],
        }

    async def list_links(self, page=None, limit=None) -> Dict[str, Any]:
        """List links, most recent first.

        Args:
            page: 1-based page number; missing or invalid means 1
            limit: Page size; missing or invalid means the default, capped at the maximum

        Returns:
            Dictionary with total, page, pages, links
        """
        page = _parse_positive_int(page, 1)
        limit = min(_parse_positive_int(limit, self.list_default_limit), self.list_max_limit)

        total = await self.store.count_links()
        links = await self.store.list_links(offset=(page - 1) * limit, limit=limit)

        entries = []
        for link in links:
            entry = link.to_dict()
            entry["short"] = self.short_url(link.slug)
            entries.append(entry)

        return {
            "total": total,
            "page": page,
            "pages": math.ceil(total / limit),
            "links": entries,
        }

    async def delete_link(self, slug: str) -> Dict[str, Any]:
        """Delete a single link.

        Raises:
            LinkNotFoundError: If the slug does not exist
        """
        if not await self.store.delete_link(slug):
            raise LinkNotFoundError(f"Slug '{slug}' not found")

        self.logger.info(f"Deleted link: {slug}")
        return {"ok": True}

    async def delete_links_by_url(self, url: Optional[str]) -> Dict[str, Any]:
        """Delete every link pointing at ``url``.

        Raises:
            InvalidLinkError: If the URL is missing
        """
        is_valid, error = is_valid_url(url)
        if not is_valid:
            raise InvalidLinkError(error)

        deleted = await self.store.delete_links_by_url(url)
        self.logger.info(f"Deleted {deleted} links for {url}")
        return {"ok": True, "deleted": deleted}

    async def resolve(self, slug: str) -> str:
        """Record a visit and return the destination URL.

        Args:
            slug: The slug being visited

        Returns:
            Destination URL

        Raises:
            LinkNotFoundError: If the slug does not exist
        """
        url = await self.store.record_visit(slug, datetime.now(timezone.utc))
        if url is None:
            self.logger.warning(f"Slug not found: {slug}")
            raise LinkNotFoundError(f"Slug '{slug}' not found")

        self.logger.debug(f"Resolved {slug} -> {url}")
        return url

    async def health_check(self) -> Dict[str, Any]:
        """Report store health.

        Returns:
            Dictionary with status, db, backend, time
        """
        healthy = await self.store.health_check()
        return {
            "status": "ok",
            "db": "connected" if healthy else "disconnected",
            "backend": self.store.backend,
            "time": datetime.now(timezone.utc).isoformat(),
        }

    async def close(self) -> None:
        """Close store connections."""
        await self.store.close()
