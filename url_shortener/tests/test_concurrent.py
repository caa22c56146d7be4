"""Tests that the server handles many simultaneous requests correctly.

Creates are serialized inside the service; reads run alongside them. These
tests assert that concurrent requests all get consistent answers.
"""

import asyncio
import json

import pytest


@pytest.mark.asyncio
class TestConcurrentConnections:
    """Prove the server handles many simultaneous requests."""

    async def test_concurrent_shorten_requests(self, client, service, data_file):
        """Many concurrent POST /shorten; all succeed and short codes are unique."""
        concurrency = 30
        urls = [f"https://example.com/page_{i}" for i in range(concurrency)]
        tasks = [client.post("/shorten", json={"url": url}) for url in urls]
        responses = await asyncio.gather(*tasks, return_exceptions=True)

        short_codes = []
        for i, r in enumerate(responses):
            if isinstance(r, Exception):
                pytest.fail(f"Request {i} raised: {r}")
            assert r.status_code == 200, f"Request {i}: status {r.status_code} body={r.text}"
            short_code = r.json()["shortCode"]
            assert service.store.get(short_code).original_link == urls[i]
            short_codes.append(short_code)

        assert len(short_codes) == len(set(short_codes)), "All short codes must be unique under concurrency"
        assert set(json.loads(data_file.read_text())) == set(short_codes)

    async def test_concurrent_same_custom_code(self, client):
        """Exactly one of many simultaneous claims on one custom code wins."""
        tasks = [
            client.post("/shorten", json={"url": f"https://example.com/{i}", "customCode": "contested"})
            for i in range(25)
        ]
        responses = await asyncio.gather(*tasks)

        statuses = sorted(r.status_code for r in responses)
        assert statuses.count(200) == 1
        assert statuses.count(409) == 24

        winner = next(r for r in responses if r.status_code == 200)
        resolved = await client.get("/url/contested")
        assert resolved.json()["validUntil"] == winner.json()["validUntil"]

    async def test_concurrent_reads_during_writes(self, client):
        """Listings taken while creates are running only ever see whole records."""
        create = await client.post("/shorten", json={"url": "https://example.com/seed", "customCode": "seed"})
        assert create.status_code == 200

        writes = [client.post("/shorten", json={"url": f"https://example.com/w{i}"}) for i in range(20)]
        reads = [client.get("/urls") for _ in range(20)]
        resolves = [client.get("/url/seed") for _ in range(20)]
        responses = await asyncio.gather(*writes, *reads, *resolves)

        for r in responses:
            assert r.status_code == 200, r.text

        for r in responses[20:40]:
            urls = r.json()["urls"]
            assert 1 <= len(urls) <= 21
            assert all(item["originalLink"].startswith("https://example.com/") for item in urls)

        for r in responses[40:]:
            assert r.json()["originalLink"] == "https://example.com/seed"

    async def test_concurrent_redirect_requests(self, client):
        """Create one short URL, then many concurrent redirects all succeed."""
        create_resp = await client.post("/shorten", json={"url": "https://example.com/redirect-target"})
        assert create_resp.status_code == 200
        short_code = create_resp.json()["shortCode"]

        tasks = [client.get(f"/s/{short_code}", follow_redirects=False) for _ in range(20)]
        responses = await asyncio.gather(*tasks, return_exceptions=True)

        for i, r in enumerate(responses):
            if isinstance(r, Exception):
                pytest.fail(f"Request {i} raised: {r}")
            assert r.status_code == 302, f"Request {i}: status {r.status_code}"
            assert r.headers.get("location") == "https://example.com/redirect-target"

        log_ids = {r.headers["x-log-id"] for r in responses}
        assert len(log_ids) == 20
