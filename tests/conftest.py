"""Pytest configuration and fixtures."""

import pytest
from contextlib import asynccontextmanager
from typing import Dict, Optional

from httpx import ASGITransport, AsyncClient

from config import Config
from ureduce.database import postgres
from ureduce.database.base import ShortLinkStoreBase
from ureduce.database.models import ShortLink
from ureduce.errors import StorageError
from ureduce.service import ShortLinkService
from ureduce.shortcode import ShortCodeGenerator
from ureduce.common.logging_config import setup_logging
from web_app import create_app


class InMemoryShortLinkStore(ShortLinkStoreBase):
    """Dict-backed store with the same conflict-ignore semantics as PostgreSQL."""

    def __init__(self):
        self.rows: Dict[str, ShortLink] = {}
        self.fail_inserts = False
        self.fail_reads = False
        self.insert_calls = 0
        self.get_calls = 0
        self.closed = False

    async def insert_if_absent(self, link: ShortLink) -> bool:
        self.insert_calls += 1
        if self.fail_inserts:
            raise StorageError("Insert error: connection reset")
        if link.id in self.rows:
            return False
        self.rows[link.id] = link
        return True

    async def get(self, short_code: str) -> Optional[ShortLink]:
        self.get_calls += 1
        if self.fail_reads:
            return None
        return self.rows.get(short_code)

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def store() -> InMemoryShortLinkStore:
    return InMemoryShortLinkStore()


@pytest.fixture
def short_code_generator():
    """Create short code generator."""
    return ShortCodeGenerator(default_length=8)


@pytest.fixture
def service(store, short_code_generator, logger) -> ShortLinkService:
    """Create service instance."""
    return ShortLinkService(
        store=store,
        short_code_generator=short_code_generator,
        logger=logger,
    )


@pytest.fixture
def config():
    return Config(db_host="localhost", db_name="ureduce_test")


@pytest.fixture
def app(service, config):
    """Create test FastAPI app."""
    return create_app(service_instance=service, config=config)


@pytest.fixture
async def client(app):
    """Create test client."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com",
        "https://github.com/user/repo",
        "https://stackoverflow.com/questions/123456",
    ]


class FakeConnection:
    """Just enough of asyncpg.Connection for the store's queries."""

    def __init__(self, pool):
        self.pool = pool

    async def execute(self, query, *args):
        self.pool.queries.append(query)
        if "CREATE TABLE" in query and self.pool.fail_schema:
            raise ConnectionResetError("schema failed")
        return "CREATE TABLE"

    async def fetchval(self, query, *args):
        self.pool.queries.append(query)
        if "INSERT" not in query:
            return 1
        if self.pool.fail_writes:
            raise ConnectionResetError("connection reset by peer")
        row_id, original_url, short_url, creation_date = args
        if row_id in self.pool.rows:
            return None
        self.pool.rows[row_id] = {
            "id": row_id,
            "original_url": original_url,
            "short_url": short_url,
            "creation_date": creation_date,
        }
        return row_id

    async def fetchrow(self, query, *args):
        self.pool.queries.append(query)
        if self.pool.fail_reads:
            raise ConnectionResetError("connection reset by peer")
        return self.pool.rows.get(args[0])


class FakePool:
    def __init__(self):
        self.rows = {}
        self.queries = []
        self.fail_schema = False
        self.fail_writes = False
        self.fail_reads = False
        self.closed = False
        self.terminated = False

    @asynccontextmanager
    async def acquire(self):
        yield FakeConnection(self)

    async def close(self):
        self.closed = True

    def terminate(self):
        self.terminated = True


@pytest.fixture
def pool():
    return FakePool()


@pytest.fixture
def create_pool_calls(monkeypatch, pool):
    """Patch asyncpg.create_pool; set ``failures`` to refuse the first N attempts."""
    state = {"failures": 0, "calls": []}

    async def fake_create_pool(**kwargs):
        state["calls"].append(kwargs)
        if len(state["calls"]) <= state["failures"]:
            raise ConnectionRefusedError("connection refused")
        return pool

    monkeypatch.setattr(postgres.asyncpg, "create_pool", fake_create_pool)
    return state
