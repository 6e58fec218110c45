"""
Shared fixtures: every test gets its own in-memory SQLite database.
"""
from __future__ import annotations

from typing import AsyncIterator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from core.menu_query import MenuQueryService
from main import create_app
from services.db import Database

MEMORY_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def db() -> AsyncIterator[Database]:
    database = Database(MEMORY_URL)
    await database.ensure_connected()
    yield database
    await database.dispose()


@pytest_asyncio.fixture
async def session(db: Database) -> AsyncIterator[AsyncSession]:
    async with db.session() as s:
        yield s


@pytest.fixture
def service(session: AsyncSession) -> MenuQueryService:
    return MenuQueryService(session)


@pytest.fixture
def app(db: Database) -> FastAPI:
    return create_app(db)


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac


def _record(hall: str = "Hall-1", day: str = "monday", meal_type: str = "breakfast",
            regular: list[str] | None = None, **extra) -> dict:
    return {
        "hall_name": hall,
        "day": day,
        "meal_type": meal_type,
        "menu_items": {"regular": regular if regular is not None else ["Idli", "Sambar"]},
        **extra,
    }


@pytest.fixture
def record():
    """Builder for a snake_case menu record payload."""
    return _record
