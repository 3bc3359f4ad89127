"""
Shared test fixtures — in-memory SQLite DB, repository, FastAPI test client.

Uses an in-memory SQLite database so tests are fast, isolated, and don't
require a running PostgreSQL.
"""

from __future__ import annotations

import os
from typing import AsyncGenerator, Generator

# ── Patch settings BEFORE any app imports ────────────────
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["AUTO_CREATE_TABLES"] = "false"
os.environ["ENVIRONMENT"] = "test"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from user_service.core.locking import ReadWriteLock
from user_service.infrastructure.database import Base, build_engine
from user_service.infrastructure.repositories.user_repository import SQLAlchemyUserRepository
from user_service.interfaces.deps import get_request_lock, get_user_repository
from user_service.main import create_app
from user_service.domain.models.user import UserModel  # noqa: F401  — ensure table is registered


# ── Database lifecycle ──────────────────────────────────

@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    """Fresh in-memory database with the users table per test."""
    test_engine = build_engine("sqlite://")
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture()
def session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture()
def repository(session_factory: sessionmaker) -> SQLAlchemyUserRepository:
    return SQLAlchemyUserRepository(session_factory)


@pytest.fixture()
def request_lock() -> ReadWriteLock:
    return ReadWriteLock()


# ── HTTP client fixture ─────────────────────────────────

@pytest_asyncio.fixture()
async def app_client(
    repository: SQLAlchemyUserRepository,
    request_lock: ReadWriteLock,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Provide an ``httpx.AsyncClient`` wired to the FastAPI app with the
    repository and request lock overridden to use the test database.
    """
    app = create_app()
    app.dependency_overrides[get_user_repository] = lambda: repository
    app.dependency_overrides[get_request_lock] = lambda: request_lock

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


ANA = {
    "name": "Ana",
    "email": "ana@x.com",
    "role": "USER",
    "password": "p1",
}


@pytest_asyncio.fixture()
async def created_user(app_client: AsyncClient) -> dict:
    """Create Ana through the API and return the request plus the new id."""
    resp = await app_client.post("/api/users", json=ANA)
    assert resp.status_code == 201, resp.text
    return {**ANA, "id": resp.json()["id"]}
