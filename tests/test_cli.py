"""Tests for the admin CLI."""

import json
import pytest

from shortlinks.cli import main


@pytest.fixture
def run_cli(tmp_path, capsys, monkeypatch):
    """Run the CLI against a temporary JSON store and return (exit code, parsed output)."""
    monkeypatch.chdir(tmp_path)
    store_args = [
        "--backend", "json",
        "--json-path", str(tmp_path / "cli-links.json"),
        "--base-url", "https://sho.rt",
    ]

    async def _run(*argv):
        code = await main(store_args + list(argv))
        captured = capsys.readouterr()
        output = captured.out if code == 0 else captured.err
        # stderr may also hold warning log lines ahead of the JSON result
        return code, json.loads(output[output.index("{\n"):])

    return _run


@pytest.mark.asyncio
class TestCLI:
    """Test CLI commands end to end."""

    async def test_create_and_resolve(self, run_cli):
        code, created = await run_cli("create", "https://example.com/page", "--code", "page")

        assert code == 0
        assert created["success"]
        assert created["short"] == "https://sho.rt/page"

        code, resolved = await run_cli("resolve", "page")
        assert code == 0
        assert resolved["url"] == "https://example.com/page"

        code, link = await run_cli("get", "page")
        assert code == 0
        assert link["visits"] == 1

    async def test_create_conflict(self, run_cli):
        await run_cli("create", "https://example.com", "--code", "dup")

        code, result = await run_cli("create", "https://example.com", "--code", "dup")

        assert code == 1
        assert not result["success"]
        assert "already exists" in result["error"]

    async def test_bulk_list_delete(self, run_cli):
        code, bulk = await run_cli("bulk", "https://example.com/qr", "--count", "4", "--prefix", "qr")
        assert code == 0
        assert bulk["total"] == 4

        code, listing = await run_cli("list", "--limit", "3")
        assert code == 0
        assert listing["total"] == 4
        assert listing["pages"] == 2

        first = bulk["links"][0]["slug"]
        code, _ = await run_cli("delete", first)
        assert code == 0

        code, deleted = await run_cli("delete-by-url", "https://example.com/qr")
        assert code == 0
        assert deleted["deleted"] == 3

    async def test_bulk_too_many(self, run_cli):
        code, result = await run_cli("bulk", "https://example.com", "--count", "5001")

        assert code == 1
        assert "5000" in result["error"]

    async def test_missing_slug(self, run_cli):
        code, result = await run_cli("get", "nothing")
        assert code == 1

        code, result = await run_cli("delete", "nothing")
        assert code == 1
        assert "not found" in result["error"]

    async def test_health(self, run_cli):
        code, health = await run_cli("health")

        assert code == 0
        assert health["db"] == "connected"
        assert health["backend"] == "json"

    async def test_missing_backend_setting(self, capsys, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("MONGO_URI", raising=False)

        code = await main(["--backend", "mongo", "health"])

        assert code == 1
        err = capsys.readouterr().err
        assert "MONGO_URI" in json.loads(err[err.index("{\n"):])["error"]

    async def test_no_command(self, capsys):
        assert await main([]) == 1
