# app/core/database.py
from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import declarative_base
import logging
import asyncio
from typing import Any, Dict, Optional

from .config import Settings

logger = logging.getLogger(__name__)

# Base class for all models
Base = declarative_base()


class Database:
    """Shared connection pool for one logical database.

    The engine is created on the first ``acquire()`` and reused for the
    lifetime of this object. Concurrent first callers wait on the same
    establishment instead of each opening their own pool.
    """

    def __init__(self, url: str, name: str, **engine_options: Any):
        self.url = make_url(url).set(database=name)
        self.name = name
        self._engine_options = engine_options
        self._engine: Optional[AsyncEngine] = None
        self._sessionmaker: Optional[async_sessionmaker[AsyncSession]] = None
        self._lock = asyncio.Lock()

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        engine_kwargs: Dict[str, Any] = {"echo": settings.DB_ECHO}
        # SQLite has no server-side pool worth tuning
        if make_url(settings.DATABASE_URL).get_backend_name() != "sqlite":
            engine_kwargs.update(
                pool_size=settings.DB_POOL_SIZE,
                max_overflow=settings.DB_MAX_OVERFLOW,
                pool_timeout=settings.DB_POOL_TIMEOUT,  # Seconds to wait for a free connection
                pool_pre_ping=True,                     # Check connection before using
                pool_recycle=settings.DB_POOL_RECYCLE,
            )
        return cls(settings.DATABASE_URL, settings.DB_NAME, **engine_kwargs)

    @property
    def is_connected(self) -> bool:
        return self._sessionmaker is not None

    async def acquire(self) -> async_sessionmaker[AsyncSession]:
        """Return the session factory for the logical database, connecting on first use."""
        if self._sessionmaker is not None:
            return self._sessionmaker

        async with self._lock:
            if self._sessionmaker is None:
                self._sessionmaker = await self._connect()
        return self._sessionmaker

    async def _connect(self) -> async_sessionmaker[AsyncSession]:
        logger.info(f"🔧 Connecting to database '{self.name}' ({self.url.get_backend_name()})")
        engine = create_async_engine(self.url, **self._engine_options)
        try:
            # Create the collection on first use, like a document store would
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except Exception as e:
            logger.error(f"Database connection failed: {str(e)}")
            await engine.dispose()
            raise

        self._engine = engine
        logger.info(f"✅ Database '{self.name}' ready")
        return async_sessionmaker(
            bind=engine,
            expire_on_commit=False,
            class_=AsyncSession,
        )

    async def ping(self) -> None:
        sessionmaker = await self.acquire()
        async with sessionmaker() as session:
            await session.execute(text("SELECT 1"))

    async def dispose(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
            logger.info(f"Database '{self.name}' connection closed")
        self._engine = None
        self._sessionmaker = None
