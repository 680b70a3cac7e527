"""JSON file implementation of the link store."""

import os
import json
import shutil
import asyncio
import logging
import tempfile
from typing import Optional, List, Dict, Any
from datetime import datetime, timezone

from .base import LinkStoreBase
from .models import Link, parse_timestamp
from ..errors import StorageError


def _is_valid_record(record) -> bool:
    """A record needs a string url and parseable timestamps and visit count."""
    if not isinstance(record, dict) or not isinstance(record.get("url"), str):
        return False
    try:
        if parse_timestamp(record.get("created")) is None:
            return False
        parse_timestamp(record.get("lastVisit"))
        int(record.get("visits", 0))
    except (TypeError, ValueError):
        return False
    return True


class JSONFileLinkStore(LinkStoreBase):
    """Link store backed by a single JSON file.

    The whole file is read and rewritten on every operation. File layout::

        {"<slug>": {"url": ..., "created": ..., "visits": 0, "lastVisit": ...}}

    All access goes through one ``asyncio.Lock`` per store instance, and writes
    land in a temporary file that is atomically renamed over the original.
    """

    backend = "json"

    def __init__(
        self,
        path: str,
        strict: bool = False,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize JSON file store.

        Args:
            path: Path of the JSON file (created on connect if absent)
            strict: Raise StorageError on a corrupt file instead of starting empty
            logger: Optional logger instance
        """
        self.path = os.path.abspath(path)
        self.strict = strict
        self.logger = logger or logging.getLogger(__name__)
        self._lock = asyncio.Lock()

    # ---- file helpers (run in a worker thread) ----

    def _ensure_file(self) -> None:
        directory = os.path.dirname(self.path)
        os.makedirs(directory, exist_ok=True)
        if not os.path.exists(self.path):
            self.logger.info(f"Creating empty link file at {self.path}")
            self._write_sync({})

    def _read_sync(self) -> Dict[str, Dict[str, Any]]:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except ValueError as e:
            return self._recover_corrupt(str(e))
        except OSError as e:
            raise StorageError(f"Cannot read link file: {e}") from e

        if not isinstance(data, dict):
            return self._recover_corrupt("top-level value is not an object")

        bad = {slug for slug, record in data.items() if not _is_valid_record(record)}
        if bad:
            kept = {slug: record for slug, record in data.items() if slug not in bad}
            return self._recover_corrupt(f"malformed records {sorted(bad)}", kept=kept)
        return data

    def _recover_corrupt(
        self,
        reason: str,
        kept: Optional[Dict[str, Dict[str, Any]]] = None,
    ) -> Dict[str, Dict[str, Any]]:
        """Back up the unreadable file and continue with ``kept`` (empty by default)."""
        if self.strict:
            raise StorageError(f"Link file {self.path} is corrupt: {reason}")
        kept = kept or {}

        stamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S%f")
        backup = f"{self.path}.corrupt-{stamp}"
        try:
            shutil.copyfile(self.path, backup)
        except OSError as e:
            raise StorageError(f"Cannot back up corrupt link file: {e}") from e

        self.logger.error(
            f"Link file {self.path} is corrupt ({reason}); "
            f"saved a copy to {backup} and continuing with {len(kept)} valid links"
        )
        self._write_sync(kept)
        return kept

    def _write_sync(self, data: Dict[str, Dict[str, Any]]) -> None:
        directory = os.path.dirname(self.path)
        fd, tmp_path = tempfile.mkstemp(prefix=".links-", suffix=".tmp", dir=directory)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
        except OSError as e:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise StorageError(f"Cannot write link file: {e}") from e

    async def _load(self) -> Dict[str, Dict[str, Any]]:
        return await asyncio.to_thread(self._read_sync)

    async def _save(self, data: Dict[str, Dict[str, Any]]) -> None:
        await asyncio.to_thread(self._write_sync, data)

    # ---- contract ----

    async def connect(self) -> None:
        """Create the file if needed and make sure it can be read."""
        async with self._lock:
            try:
                await asyncio.to_thread(self._ensure_file)
            except OSError as e:
                raise StorageError(f"Cannot create link file {self.path}: {e}") from e
            data = await self._load()
        self.logger.info(f"Loaded {len(data)} links from {self.path}")

    async def close(self) -> None:
        """Nothing to release; every operation opens the file itself."""
        self.logger.debug(f"Closed JSON link store at {self.path}")

    async def health_check(self) -> bool:
        """The file must exist and be readable and writable."""
        return await asyncio.to_thread(os.access, self.path, os.R_OK | os.W_OK)

    async def insert_link(self, slug: str, url: str, created_at: datetime) -> bool:
        async with self._lock:
            data = await self._load()
            if slug in data:
                return False
            data[slug] = Link(slug=slug, url=url, created_at=created_at).to_record()
            await self._save(data)
        return True

    async def insert_links(self, slugs: List[str], url: str, created_at: datetime) -> List[str]:
        inserted = []
        async with self._lock:
            data = await self._load()
            for slug in slugs:
                if slug in data:
                    self.logger.debug(f"Skipping existing slug in batch: {slug}")
                    continue
                data[slug] = Link(slug=slug, url=url, created_at=created_at).to_record()
                inserted.append(slug)
            if inserted:
                await self._save(data)
        return inserted

    async def get_link(self, slug: str) -> Optional[Link]:
        async with self._lock:
            data = await self._load()
        record = data.get(slug)
        return Link.from_dict(slug, record) if record else None

    async def count_links(self) -> int:
        async with self._lock:
            data = await self._load()
        return len(data)

    async def list_links(self, offset: int = 0, limit: int = 100) -> List[Link]:
        async with self._lock:
            data = await self._load()

        # Newest insertion first so the stable sort breaks timestamp ties by insertion order
        links = [Link.from_dict(slug, record) for slug, record in reversed(list(data.items()))]
        links.sort(key=lambda link: link.created_at, reverse=True)
        return links[offset:offset + limit]

    async def delete_link(self, slug: str) -> bool:
        async with self._lock:
            data = await self._load()
            if slug not in data:
                return False
            del data[slug]
            await self._save(data)
        return True

    async def delete_links_by_url(self, url: str) -> int:
        async with self._lock:
            data = await self._load()
            doomed = [slug for slug, record in data.items() if record.get("url") == url]
            for slug in doomed:
                del data[slug]
            if doomed:
                await self._save(data)
        return len(doomed)

    async def record_visit(self, slug: str, visited_at: datetime) -> Optional[str]:
        async with self._lock:
            data = await self._load()
            record = data.get(slug)
            if record is None:
                return None
            record["visits"] = int(record.get("visits", 0)) + 1
            record["lastVisit"] = visited_at.isoformat()
            await self._save(data)
        return record["url"]
