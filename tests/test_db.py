# tests/test_db.py
from __future__ import annotations

import pytest

from core.errors import StorageError
from services.db import Database


@pytest.mark.asyncio
async def test_ensure_connected_is_idempotent():
    db = Database("sqlite+aiosqlite:///:memory:")
    assert not db.connected

    await db.ensure_connected()
    engine = db._engine
    await db.ensure_connected()

    assert db.connected
    assert db._engine is engine
    await db.dispose()
    assert not db.connected


@pytest.mark.asyncio
async def test_session_connects_lazily():
    db = Database("sqlite+aiosqlite:///:memory:")
    async with db.session() as s:
        assert s is not None
    assert db.connected
    await db.dispose()


@pytest.mark.asyncio
async def test_unreachable_database_raises_storage_error(tmp_path):
    missing = tmp_path / "no" / "such" / "dir" / "mess.db"
    db = Database(f"sqlite+aiosqlite:///{missing}")

    with pytest.raises(StorageError):
        await db.ensure_connected()
    assert not db.connected


def test_default_url_used_when_unset():
    assert Database(None).url == "sqlite+aiosqlite:///./mess.db"


@pytest.mark.asyncio
async def test_session_without_sessionmaker_raises_storage_error(monkeypatch):
    db = Database("sqlite+aiosqlite:///:memory:")

    async def _noop():
        return None

    monkeypatch.setattr(db, "ensure_connected", _noop)

    with pytest.raises(StorageError, match="disposed"):
        async with db.session():
            pass
