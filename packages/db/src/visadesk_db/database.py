# This project was developed with assistance from AI tools.
"""Async database engine lifecycle and FastAPI session dependencies.

``DatabaseService`` is an explicitly constructed storage handle: the API
lifespan builds one, calls ``connect()`` on startup and ``close()`` on
shutdown, and stores it on ``app.state``. Nothing here is connected at
import time.
"""

import logging
from collections.abc import AsyncIterator

from sqlalchemy import select, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base
from starlette.requests import Request

from .config import db_settings

logger = logging.getLogger(__name__)

Base = declarative_base()


class DatabaseService:
    """Owns the async engine and session factory for one database."""

    def __init__(
        self,
        url: str | None = None,
        *,
        echo: bool | None = None,
        engine: AsyncEngine | None = None,
    ):
        self.url = url or db_settings.DATABASE_URL
        self.echo = db_settings.SQL_ECHO if echo is None else echo
        self._engine = engine
        self._sessionmaker: async_sessionmaker[AsyncSession] | None = None
        if engine is not None:
            self._sessionmaker = _make_sessionmaker(engine)

    @property
    def is_connected(self) -> bool:
        return self._engine is not None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise RuntimeError("DatabaseService is not connected; call connect() first")
        return self._engine

    async def connect(self) -> None:
        """Create the engine. Safe to call more than once."""
        if self._engine is not None:
            return
        self._engine = create_async_engine(self.url, echo=self.echo, pool_pre_ping=True)
        self._sessionmaker = _make_sessionmaker(self._engine)
        logger.info("Database engine created (%s)", self._engine.url.render_as_string())

    async def close(self) -> None:
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._sessionmaker = None
        logger.info("Database engine disposed")

    def session(self) -> AsyncSession:
        """Return a new session. Use as ``async with db_service.session() as s``."""
        if self._sessionmaker is None:
            raise RuntimeError("DatabaseService is not connected; call connect() first")
        return self._sessionmaker()

    async def create_all(self) -> None:
        """Create all tables and seed counter rows (dev/test; production uses Alembic)."""
        from .models import Counter
        from .sequence import SEQUENCE_NAMES

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

        async with self.session() as session:
            existing = set((await session.execute(select(Counter.name))).scalars().all())
            for name in SEQUENCE_NAMES:
                if name not in existing:
                    session.add(Counter(name=name, seq=0))
            await session.commit()

    async def health_check(self) -> bool:
        """Return True if the database answers a trivial query."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception:
            logger.warning("Database health check failed", exc_info=True)
            return False


def _make_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )


def get_db_service(request: Request) -> DatabaseService:
    """FastAPI dependency: the DatabaseService created by the app lifespan."""
    return request.app.state.db_service


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """FastAPI dependency: one session per request."""
    db_service = get_db_service(request)
    async with db_service.session() as session:
        yield session
