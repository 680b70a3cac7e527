"""Tests that the server handles many simultaneous requests correctly.

The JSON store serializes every read-modify-write behind one lock, so
concurrent redirects and creates must neither lose visits nor hand out a
slug twice.
"""

import asyncio
import pytest


@pytest.mark.asyncio
class TestConcurrentConnections:
    """Prove the server handles many simultaneous requests."""

    async def test_concurrent_health_requests(self, client):
        """Many concurrent GET /api/health requests all succeed."""
        responses = await asyncio.gather(*[client.get("/api/health") for _ in range(30)])

        assert all(r.status_code == 200 for r in responses)

    async def test_concurrent_redirects_count_every_visit(self, client, admin_headers, sample_urls):
        """N simultaneous redirects add exactly N visits."""
        await client.post("/api/create", json={"url": sample_urls[0], "code": "hot"}, headers=admin_headers)

        concurrency = 40
        responses = await asyncio.gather(*[client.get("/hot") for _ in range(concurrency)])

        assert all(r.status_code == 301 for r in responses)
        assert all(r.headers["location"] == sample_urls[0] for r in responses)

        listing = await client.get("/api/list", headers=admin_headers)
        assert listing.json()["links"][0]["visits"] == concurrency

    async def test_concurrent_creates_same_code(self, client, admin_headers, sample_urls):
        """Only one of many simultaneous creates for a code wins."""
        responses = await asyncio.gather(*[
            client.post("/api/create", json={"url": sample_urls[i % 3], "code": "race"}, headers=admin_headers)
            for i in range(15)
        ])

        statuses = sorted(r.status_code for r in responses)
        assert statuses.count(200) == 1
        assert statuses.count(409) == 14

    async def test_concurrent_random_creates(self, client, admin_headers, sample_urls):
        """Simultaneous creates with generated slugs all get distinct slugs."""
        responses = await asyncio.gather(*[
            client.post("/api/create", json={"url": sample_urls[0]}, headers=admin_headers)
            for _ in range(25)
        ])

        assert all(r.status_code == 200 for r in responses)
        assert len({r.json()["slug"] for r in responses}) == 25
