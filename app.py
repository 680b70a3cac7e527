#!/usr/bin/env python3
"""
Main entry point for the shortlinks service.

The store is connected inside the FastAPI lifespan; if it cannot be reached
the service refuses to start and the process exits with a non-zero status.

Usage:
    python app.py

Environment variables:
    PORT - Port to listen on
    ADMIN_KEY - Shared secret for the /api routes
    BASE_URL - Base URL for short links
    STORE_BACKEND - auto, mongo, postgres or json
    MONGO_URI - MongoDB connection string (mongo backend)
    POSTGRES_URL - PostgreSQL connection URL (postgres backend)
    JSON_STORE_PATH - Link file path (json backend)
    KEEPALIVE_URL - Optional URL to ping periodically
    LOG_LEVEL - Logging level
"""

import signal
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from config import load_config
from shortlinks.service import LinkService
from shortlinks.store.factory import create_store
from shortlinks.keepalive import KeepAlivePinger
from shortlinks.common.logging_config import setup_logging
from web_app import create_app

STARTUP_FAILURE = 3


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown."""
    config = app.state.config
    logger = app.state.logger

    logger.info("Starting shortlinks service...")

    store = create_store(config, logger=logger)
    # A StorageError here aborts startup
    await store.connect()

    service = LinkService.from_config(store, config, logger=logger)
    app.state.store = store
    app.state.service = service

    pinger = None
    if config.keepalive_url:
        pinger = KeepAlivePinger(
            url=config.keepalive_url,
            interval_seconds=config.keepalive_interval_seconds,
            logger=logger,
        )
        pinger.start()

    logger.info("Service started successfully")

    yield

    logger.info("Shutting down shortlinks service...")

    try:
        if pinger:
            await pinger.stop()
    finally:
        await service.close()

    logger.info("Service stopped")


def main():
    """Main entry point."""
    config = load_config()

    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    logger.info("shortlinks service")
    logger.info(f"Configuration: {config.model_dump(exclude={'admin_key', 'mongo_uri', 'postgres_url'})}")

    # Store and service are created in the lifespan
    app = create_app(
        store_instance=None,
        service_instance=None,
        config=config,
    )

    app.state.config = config
    app.state.logger = logger

    app.router.lifespan_context = lifespan

    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        lifespan="on",
        log_level=config.log_level.lower(),
        access_log=True,
    )

    server = uvicorn.Server(uvicorn_config)

    def handle_signal(signum, frame):
        logger.info(f"Received signal {signum}, initiating graceful shutdown...")
        server.should_exit = True

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    try:
        logger.info(f"Starting server on {config.host}:{config.port}")
        server.run()
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)

    if not server.started:
        logger.error("Link store unavailable; refusing to serve traffic")
        sys.exit(STARTUP_FAILURE)


if __name__ == "__main__":
    main()
