"""Select a link store backend from configuration."""

import logging
from typing import Optional

from .base import LinkStoreBase

BACKENDS = ("mongo", "postgres", "json")


def resolve_backend(config) -> str:
    """Resolve the backend name, expanding ``auto``.

    ``auto`` picks mongo when a MongoDB URI is configured, postgres when a
    PostgreSQL URL is configured, and the JSON file otherwise.
    """
    backend = (config.store_backend or "auto").strip().lower()
    if backend == "auto":
        if config.mongo_uri:
            return "mongo"
        if config.postgres_url:
            return "postgres"
        return "json"
    if backend not in BACKENDS:
        raise ValueError(f"Unknown store backend: {backend!r}")
    return backend


def create_store(config, logger: Optional[logging.Logger] = None) -> LinkStoreBase:
    """Build the link store selected by ``config``.

    Driver modules are imported only for the backend in use.

    Args:
        config: Application configuration
        logger: Optional logger passed to the store

    Returns:
        An unconnected store; call ``connect()`` before use

    Raises:
        ValueError: If the backend is unknown or its connection setting is missing
    """
    logger = logger or logging.getLogger(__name__)
    backend = resolve_backend(config)
    logger.info(f"Selected link store backend: {backend}")

    if backend == "mongo":
        if not config.mongo_uri:
            raise ValueError("MONGO_URI is required for the mongo backend")
        from .mongo import MongoLinkStore
        return MongoLinkStore(
            mongo_uri=config.mongo_uri,
            database=config.mongo_database,
            collection=config.mongo_collection,
            logger=logger,
        )

    if backend == "postgres":
        if not config.postgres_url:
            raise ValueError("POSTGRES_URL is required for the postgres backend")
        from .postgres import PostgresLinkStore
        return PostgresLinkStore(db_config=config.postgres_url, logger=logger)

    from .json_file import JSONFileLinkStore
    return JSONFileLinkStore(
        path=config.json_store_path,
        strict=config.json_store_strict,
        logger=logger,
    )
