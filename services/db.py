"""
services/db.py
────────────────────────────────────────────────────────────────────────
* Async SQLAlchemy v2 setup behind an explicit `Database` handle
* The `meal_records` table (one row per menu slot, items kept as JSON)
* FastAPI session dependency
"""
from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any, AsyncGenerator, AsyncIterator

from fastapi import Request
from sqlalchemy import JSON, DateTime, Integer, String, func, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncAttrs,
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.pool import StaticPool

from config import DEFAULT_DATABASE_URL
from core.errors import StorageError

_LOG = logging.getLogger(__name__)


# ───────── declarative base ──────────────────────────────────────────
class Base(AsyncAttrs, DeclarativeBase):
    pass


class MealRecord(Base):
    __tablename__ = "meal_records"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    hall_name: Mapped[str] = mapped_column(String(100), index=True)
    day: Mapped[str] = mapped_column(String(16))
    meal_type: Mapped[str] = mapped_column(String(32))
    month: Mapped[str] = mapped_column(String(16), index=True)
    year: Mapped[int] = mapped_column(Integer, index=True)
    # {"regular": [...], "extras": [...], "special": [...]}
    menu_items: Mapped[dict[str, Any]] = mapped_column(JSON, default=dict)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.now(), onupdate=func.now()
    )


# ───────── connection handle ─────────────────────────────────────────
class Database:
    """
    One lazily-created engine per handle.

    `ensure_connected()` is cheap after the first successful call, so it is
    safe to call before every operation. There is no reconnect-on-drop: once
    connected, the engine's own pool deals with broken connections.
    """

    def __init__(
        self,
        url: str | None = None,
        connect_timeout: float = 10.0,
        echo: bool = False,
    ):
        self.url = url or DEFAULT_DATABASE_URL
        self.connect_timeout = connect_timeout
        self.echo = echo
        self.connected = False
        self._engine: AsyncEngine | None = None
        self._sessionmaker: async_sessionmaker[AsyncSession] | None = None
        self._lock = asyncio.Lock()

    def _create_engine(self) -> AsyncEngine:
        kwargs: dict[str, Any] = {
            "echo": self.echo,
            "connect_args": {"timeout": self.connect_timeout},
        }
        if self.url.startswith("sqlite") and (
            ":memory:" in self.url or self.url.endswith("://")
        ):
            # every session must see the same in-memory database
            kwargs["poolclass"] = StaticPool
        else:
            kwargs["pool_pre_ping"] = True
        return create_async_engine(self.url, **kwargs)

    async def ensure_connected(self) -> None:
        if self.connected:
            return
        async with self._lock:
            if self.connected:
                return
            engine = self._create_engine()
            try:
                async with engine.begin() as conn:
                    await conn.execute(text("SELECT 1"))
                    await conn.run_sync(Base.metadata.create_all)
            except (SQLAlchemyError, OSError) as exc:
                await engine.dispose()
                _LOG.error("database connection failed: url=%s error=%s", engine.url, exc)
                raise StorageError(f"Database connection failed: {exc}") from exc

            self._engine = engine
            self._sessionmaker = async_sessionmaker(engine, expire_on_commit=False)
            self.connected = True
            _LOG.info("database connected: %s", engine.url)

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        await self.ensure_connected()
        if self._sessionmaker is None:
            raise StorageError("Database handle was disposed while opening a session")
        async with self._sessionmaker() as session:
            yield session

    async def dispose(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
        self._engine = None
        self._sessionmaker = None
        self.connected = False


# ───────── session helper ────────────────────────────────────────────

async def get_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    db: Database = request.app.state.db
    async with db.session() as session:
        yield session
