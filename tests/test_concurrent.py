"""Tests that the server handles many simultaneous requests correctly.

Requests share one service and one store, with no application-level
locking; the conflict-ignore insert is what keeps identical creates safe.
"""

import asyncio
import pytest


class TestConcurrentConnections:
    """Many simultaneous requests against one app."""

    async def test_concurrent_same_url(self, client, store):
        """Identical concurrent creates return one code and leave one row."""
        concurrency = 30
        tasks = [
            client.post("/shorten", json={"url": "https://example.com/same"})
            for _ in range(concurrency)
        ]
        responses = await asyncio.gather(*tasks, return_exceptions=True)

        codes = set()
        for i, r in enumerate(responses):
            if isinstance(r, Exception):
                pytest.fail(f"Request {i} raised: {r}")
            assert r.status_code == 200, f"Request {i}: status {r.status_code} body={r.text}"
            codes.add(r.json()["short_url"])

        assert len(codes) == 1
        assert len(store.rows) == 1

    async def test_concurrent_different_urls(self, client, store):
        concurrency = 30
        urls = [f"https://example.com/page_{i}" for i in range(concurrency)]
        tasks = [client.post("/shorten", json={"url": url}) for url in urls]
        responses = await asyncio.gather(*tasks, return_exceptions=True)

        for i, r in enumerate(responses):
            if isinstance(r, Exception):
                pytest.fail(f"Request {i} raised: {r}")
            assert r.status_code == 200
            assert store.rows[r.json()["short_url"]].original_url == urls[i]

    async def test_concurrent_redirect_requests(self, client):
        create_resp = await client.post(
            "/shorten",
            json={"url": "https://example.com/redirect-target"},
        )
        assert create_resp.status_code == 200
        short_code = create_resp.json()["short_url"]

        tasks = [
            client.get(f"/{short_code}", follow_redirects=False)
            for _ in range(20)
        ]
        responses = await asyncio.gather(*tasks, return_exceptions=True)

        for i, r in enumerate(responses):
            if isinstance(r, Exception):
                pytest.fail(f"Request {i} raised: {r}")
            assert r.status_code == 302, f"Request {i}: status {r.status_code}"
            assert r.headers.get("location") == "https://example.com/redirect-target"
