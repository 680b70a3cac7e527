"""Tests for backend selection."""

import pytest

from config import Config
from shortlinks.store.factory import create_store, resolve_backend
from shortlinks.store.json_file import JSONFileLinkStore
from shortlinks.store.mongo import MongoLinkStore
from shortlinks.store.postgres import PostgresLinkStore


def make_config(**overrides):
    values = {"store_backend": "auto", "mongo_uri": None, "postgres_url": None}
    values.update(overrides)
    return Config(**values)


class TestResolveBackend:
    """Test ``auto`` expansion and validation."""

    def test_auto_prefers_mongo(self):
        config = make_config(mongo_uri="mongodb://db", postgres_url="postgresql://db/x")
        assert resolve_backend(config) == "mongo"

    def test_auto_postgres(self):
        assert resolve_backend(make_config(postgres_url="postgresql://db/x")) == "postgres"

    def test_auto_json(self):
        assert resolve_backend(make_config()) == "json"

    def test_explicit_backend(self):
        config = make_config(store_backend=" JSON ", mongo_uri="mongodb://db")
        assert resolve_backend(config) == "json"

    def test_unknown_backend(self):
        with pytest.raises(ValueError):
            resolve_backend(make_config(store_backend="sqlite"))


class TestCreateStore:
    """Test store construction."""

    def test_json_store(self, tmp_path, logger):
        config = make_config(json_store_path=str(tmp_path / "l.json"), json_store_strict=True)
        store = create_store(config, logger=logger)

        assert isinstance(store, JSONFileLinkStore)
        assert store.strict
        assert store.path == str(tmp_path / "l.json")

    def test_mongo_store(self, logger):
        config = make_config(mongo_uri="mongodb://localhost:27017", mongo_database="db1", mongo_collection="c1")
        store = create_store(config, logger=logger)

        assert isinstance(store, MongoLinkStore)
        assert store.database_name == "db1"
        assert store.collection_name == "c1"

    def test_postgres_store(self, logger):
        config = make_config(postgres_url="postgresql://u:p@localhost/db")
        store = create_store(config, logger=logger)

        assert isinstance(store, PostgresLinkStore)
        assert store.db_config == "postgresql://u:p@localhost/db"

    def test_missing_connection_setting(self):
        with pytest.raises(ValueError, match="MONGO_URI"):
            create_store(make_config(store_backend="mongo"))
        with pytest.raises(ValueError, match="POSTGRES_URL"):
            create_store(make_config(store_backend="postgres"))
