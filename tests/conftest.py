"""Pytest configuration and fixtures."""

import pytest
from typing import AsyncGenerator

from httpx import AsyncClient, ASGITransport

from config import Config
from shortlinks.service import LinkService
from shortlinks.slugs import SlugGenerator
from shortlinks.store.json_file import JSONFileLinkStore
from shortlinks.common.logging_config import setup_logging
from web_app import create_app

ADMIN_KEY = "test-admin-key"
BASE_URL = "http://testserver"


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def store_path(tmp_path):
    """Path of the JSON link file used by the test store."""
    return tmp_path / "links.json"


@pytest.fixture
async def test_store(store_path, logger) -> AsyncGenerator[JSONFileLinkStore, None]:
    """Create a connected JSON file store in a temporary directory."""
    store = JSONFileLinkStore(path=str(store_path), logger=logger)
    await store.connect()

    yield store

    await store.close()


@pytest.fixture
def slug_generator():
    """Create slug generator."""
    return SlugGenerator(default_length=7)


@pytest.fixture
async def service(test_store, slug_generator, logger) -> LinkService:
    """Create service instance."""
    return LinkService(
        store=test_store,
        base_url=BASE_URL,
        slug_generator=slug_generator,
        logger=logger,
    )


@pytest.fixture
def config(store_path):
    """Configuration pointing at the temporary JSON store."""
    return Config(
        admin_key=ADMIN_KEY,
        base_url=BASE_URL,
        store_backend="json",
        json_store_path=str(store_path),
        mongo_uri=None,
        postgres_url=None,
    )


@pytest.fixture
async def app(test_store, service, config):
    """Create test FastAPI app."""
    return create_app(
        store_instance=test_store,
        service_instance=service,
        config=config,
    )


@pytest.fixture
async def client(app):
    """Create test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url=BASE_URL) as ac:
        yield ac


@pytest.fixture
def admin_key():
    """The admin key the test app accepts."""
    return ADMIN_KEY


@pytest.fixture
def admin_headers(admin_key):
    """Headers carrying the admin key."""
    return {"X-API-Key": admin_key}


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/test",
        "https://github.com/user/repo",
        "https://stackoverflow.com/questions/123456",
    ]
