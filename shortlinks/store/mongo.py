"""MongoDB implementation of the link store."""

import logging
from typing import Optional, List
from datetime import datetime

from pymongo import AsyncMongoClient, ASCENDING, DESCENDING, ReturnDocument
from pymongo.errors import BulkWriteError, DuplicateKeyError, PyMongoError

from .base import LinkStoreBase
from .models import Link
from ..errors import StorageError

DUPLICATE_KEY_CODE = 11000


class MongoLinkStore(LinkStoreBase):
    """MongoDB implementation of the link store.

    Documents look like ``{slug, url, visits, createdAt, lastVisit?}``; a unique
    index on ``slug`` enforces one link per slug.
    """

    backend = "mongo"

    def __init__(
        self,
        mongo_uri: str,
        database: str = "shortlinks",
        collection: str = "links",
        server_selection_timeout_ms: int = 5000,
        client: Optional[AsyncMongoClient] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize MongoDB store.

        Args:
            mongo_uri: MongoDB connection string
            database: Database name
            collection: Collection holding link documents
            server_selection_timeout_ms: How long to wait for a reachable server
            client: Pre-built client (mainly for tests)
            logger: Optional logger instance
        """
        self.mongo_uri = mongo_uri
        self.database_name = database
        self.collection_name = collection
        self.logger = logger or logging.getLogger(__name__)
        self.client = client if client is not None else AsyncMongoClient(
            mongo_uri,
            serverSelectionTimeoutMS=server_selection_timeout_ms,
            tz_aware=True,
        )
        self.collection = self.client[database][collection]

    async def connect(self) -> None:
        """Ping the server and create the indexes."""
        try:
            await self.client.admin.command("ping")
            await self.collection.create_index([("slug", ASCENDING)], unique=True)
            await self.collection.create_index([("url", ASCENDING)])
            await self.collection.create_index([("createdAt", DESCENDING)])
        except PyMongoError as e:
            self.logger.error(f"Error connecting to MongoDB: {e}")
            raise StorageError(f"Cannot connect to MongoDB: {e}") from e

        self.logger.info(
            f"Connected to MongoDB collection {self.database_name}.{self.collection_name}"
        )

    async def close(self) -> None:
        await self.client.close()
        self.logger.debug("MongoDB client closed")

    async def health_check(self) -> bool:
        try:
            await self.client.admin.command("ping")
            return True
        except PyMongoError as e:
            self.logger.error(f"Health check failed: {e}")
            return False

    @staticmethod
    def _new_document(slug: str, url: str, created_at: datetime) -> dict:
        return {"slug": slug, "url": url, "visits": 0, "createdAt": created_at}

    async def insert_link(self, slug: str, url: str, created_at: datetime) -> bool:
        try:
            await self.collection.insert_one(self._new_document(slug, url, created_at))
        except DuplicateKeyError:
            self.logger.warning(f"Slug already exists: {slug}")
            return False
        except PyMongoError as e:
            self.logger.error(f"Error inserting link: {e}")
            raise StorageError(str(e)) from e
        return True

    async def insert_links(self, slugs: List[str], url: str, created_at: datetime) -> List[str]:
        if not slugs:
            return []

        docs = [self._new_document(slug, url, created_at) for slug in slugs]
        try:
            await self.collection.insert_many(docs, ordered=False)
        except BulkWriteError as e:
            write_errors = e.details.get("writeErrors", [])
            fatal = [err for err in write_errors if err.get("code") != DUPLICATE_KEY_CODE]
            if fatal or e.details.get("writeConcernErrors"):
                self.logger.error(f"Bulk insert failed: {e.details}")
                raise StorageError(f"Bulk insert failed: {fatal[0]['errmsg'] if fatal else e}") from e
            failed = {err["index"] for err in write_errors}
            self.logger.info(f"Bulk insert skipped {len(failed)} duplicate slugs")
            return [slug for i, slug in enumerate(slugs) if i not in failed]
        except PyMongoError as e:
            self.logger.error(f"Error inserting links: {e}")
            raise StorageError(str(e)) from e
        return list(slugs)

    async def get_link(self, slug: str) -> Optional[Link]:
        try:
            doc = await self.collection.find_one({"slug": slug})
        except PyMongoError as e:
            raise StorageError(str(e)) from e
        return Link.from_document(doc) if doc else None

    async def count_links(self) -> int:
        try:
            return await self.collection.count_documents({})
        except PyMongoError as e:
            raise StorageError(str(e)) from e

    async def list_links(self, offset: int = 0, limit: int = 100) -> List[Link]:
        try:
            cursor = (
                self.collection.find({})
                .sort([("createdAt", DESCENDING), ("_id", DESCENDING)])
                .skip(offset)
                .limit(limit)
            )
            docs = await cursor.to_list(length=None)
        except PyMongoError as e:
            self.logger.error(f"Error listing links: {e}")
            raise StorageError(str(e)) from e
        return [Link.from_document(doc) for doc in docs]

    async def delete_link(self, slug: str) -> bool:
        try:
            result = await self.collection.delete_one({"slug": slug})
        except PyMongoError as e:
            raise StorageError(str(e)) from e
        return result.deleted_count > 0

    async def delete_links_by_url(self, url: str) -> int:
        try:
            result = await self.collection.delete_many({"url": url})
        except PyMongoError as e:
            raise StorageError(str(e)) from e
        return result.deleted_count

    async def record_visit(self, slug: str, visited_at: datetime) -> Optional[str]:
        try:
            doc = await self.collection.find_one_and_update(
                {"slug": slug},
                {"$inc": {"visits": 1}, "$set": {"lastVisit": visited_at}},
                projection={"url": True},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            self.logger.error(f"Error recording visit: {e}")
            raise StorageError(str(e)) from e
        return doc["url"] if doc else None
