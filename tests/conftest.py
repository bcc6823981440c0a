"""
tests.conftest

Shared fixtures: an app per test backed by a temporary SQLite file and the mock ledger.

Responsibilities:
- Build settings pointing at `tmp_path`.
- Run the app lifespan explicitly (httpx ASGITransport does not manage it).
- Provide the app factory fixture used by every API test.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

import httpx
import pytest
import pytest_asyncio

from landchain_registry.api.app import create_app
from landchain_registry.ledger.mock import MockLedger
from landchain_registry.settings import Settings


@pytest.fixture
def make_settings(tmp_path: Path) -> Callable[..., Settings]:
    def make(**overrides: Any) -> Settings:
        values: dict[str, Any] = {
            "env": "test",
            "database_url": f"sqlite+aiosqlite:///{tmp_path / 'registry.db'}",
            "ledger_mode": "mock",
            "seed_demo_users": False,
            "jwt_secret": "test-secret",
            "fabric_wallet_path": str(tmp_path / "wallet"),
            "fabric_connection_profile": str(tmp_path / "connection-profile.json"),
        }
        values.update(overrides)
        return Settings(**values)

    return make


@pytest.fixture
def ledger() -> MockLedger:
    return MockLedger()


@pytest.fixture
def client_factory(make_settings: Callable[..., Settings], ledger: MockLedger):
    @asynccontextmanager
    async def make(
        *, http_transport: httpx.AsyncBaseTransport | None = None, **overrides: Any
    ) -> AsyncIterator[httpx.AsyncClient]:
        app = create_app(
            settings=make_settings(**overrides), ledger=ledger, http_transport=http_transport
        )
        async with app.router.lifespan_context(app):
            transport = httpx.ASGITransport(app=app)
            async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
                yield client

    return make


@pytest_asyncio.fixture
async def client(client_factory) -> AsyncIterator[httpx.AsyncClient]:
    async with client_factory() as c:
        yield c
