"""
pytest configuration and fixtures
An in-memory stand-in for the asyncpg pool backs the users table.
"""

from contextlib import asynccontextmanager
from typing import Any, Dict, List, Tuple

import httpx
import pytest
import pytest_asyncio
from faker import Faker
from fastapi.testclient import TestClient

from record_browser.client import UsersApiClient
from record_store.app import app
from record_store.database import connection


class FakeConnection:
    """Answers the users statements the way PostgreSQL would"""

    def __init__(self, pool: "FakePool"):
        self.pool = pool

    async def fetch(self, query: str, *args) -> List[Dict[str, Any]]:
        self.pool.statements.append((query, args))
        assert query.startswith("SELECT id, name, email FROM users"), query
        return [dict(row) for _, row in sorted(self.pool.rows.items())]

    async def fetchrow(self, query: str, *args) -> Dict[str, Any]:
        self.pool.statements.append((query, args))
        assert query.startswith("INSERT INTO users"), query
        name, email = args
        self.pool.next_id += 1
        self.pool.rows[self.pool.next_id] = {"id": self.pool.next_id, "name": name, "email": email}
        return {"id": self.pool.next_id}

    async def fetchval(self, query: str, *args) -> Any:
        self.pool.statements.append((query, args))
        return 1

    async def execute(self, query: str, *args) -> str:
        self.pool.statements.append((query, args))
        command = query.split()[0].upper()
        if command == "UPDATE":
            name, email, user_id = args
            if user_id not in self.pool.rows:
                return "UPDATE 0"
            self.pool.rows[user_id].update(name=name, email=email)
            return "UPDATE 1"
        if command == "DELETE":
            (user_id,) = args
            return "DELETE 1" if self.pool.rows.pop(user_id, None) else "DELETE 0"
        return command


class FakePool:
    def __init__(self):
        self.rows: Dict[int, Dict[str, Any]] = {}
        self.next_id = 0
        self.statements: List[Tuple[str, tuple]] = []

    @asynccontextmanager
    async def acquire(self):
        yield FakeConnection(self)

    async def close(self):
        pass


class BrokenPool:
    """Every acquire fails as if the database were unreachable"""

    @asynccontextmanager
    async def acquire(self):
        raise ConnectionRefusedError("could not connect to server: Connection refused")
        yield

    async def close(self):
        pass


@pytest.fixture
def fake_pool(monkeypatch) -> FakePool:
    pool = FakePool()
    monkeypatch.setattr(connection, "db_pool", pool)
    return pool


@pytest.fixture
def broken_pool(monkeypatch) -> BrokenPool:
    pool = BrokenPool()
    monkeypatch.setattr(connection, "db_pool", pool)
    return pool


@pytest.fixture
def client() -> TestClient:
    """FastAPI test client; lifespan is not run so no real database is touched"""
    return TestClient(app)


@pytest_asyncio.fixture
async def store_client():
    """Browser-side API client wired straight into the ASGI app"""
    http_client = httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://testserver")
    async with UsersApiClient(http_client=http_client) as api_client:
        yield api_client


@pytest.fixture
def fake() -> Faker:
    return Faker()
