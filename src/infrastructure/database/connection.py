from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from src.config import settings

logger = structlog.get_logger(__name__)


class Base(DeclarativeBase):
    pass


class Database:
    """
    Explicitly owned handle on the catalog database.

    Nothing connects at import time: the owner calls ``connect()`` on
    startup and ``dispose()`` on shutdown.
    """

    def __init__(
        self,
        url: str = settings.async_database_url,
        *,
        pool_size: int = settings.db_pool_size,
        max_overflow: int = settings.db_max_overflow,
        echo: bool = False,
    ) -> None:
        self._url = url
        self._pool_size = pool_size
        self._max_overflow = max_overflow
        self._echo = echo
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise RuntimeError("Database is not connected; call connect() first.")
        return self._engine

    def connect(self) -> None:
        if self._engine is not None:
            return

        options: dict = {"echo": self._echo, "pool_pre_ping": True}  # type: ignore[type-arg]
        if not self._url.startswith("sqlite"):
            options.update(pool_size=self._pool_size, max_overflow=self._max_overflow)

        self._engine = create_async_engine(self._url, **options)
        self._session_factory = async_sessionmaker(
            bind=self._engine,
            expire_on_commit=False,
            autoflush=False,
        )
        url = make_url(self._url)
        logger.info(
            "database_pool_created",
            driver=url.drivername,
            host=url.host,
            port=url.port,
            database=url.database,
        )

    async def dispose(self) -> None:
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._session_factory = None
        logger.info("database_pool_closed")

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        if self._session_factory is None:
            raise RuntimeError("Database is not connected; call connect() first.")
        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def ping(self) -> None:
        """Run a trivial query; raises if the database is unreachable."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
