from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional
from sqlalchemy import make_url, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine, AsyncEngine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from abstract_repository.config.settings import Settings, get_settings
from abstract_repository.infrastructure.observability.logging import get_logger

logger = get_logger(__name__)


class DatabaseManager:
    """
    Manages the async engine and the sessions repositories run on.

    Features:
    - Configurable connection pooling (size, overflow, timeout, recycle)
    - Connection health checks via pool_pre_ping
    - Schema creation from SQLModel metadata
    - Automatic session management with commit/rollback

    Usage:
        db = DatabaseManager()
        await db.connect(url="postgresql+asyncpg://...", pool_size=5)
        async with db.session() as session:
            repo = BaseRepository(Product, session)
            await repo.create({"name": "Widget"})
        await db.disconnect()
    """

    def __init__(self):
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    async def connect(
        self,
        url: str,
        pool_size: int = 5,
        max_overflow: int = 10,
        pool_timeout: int = 30,
        pool_recycle: int = 3600,
        pool_pre_ping: bool = True,
        echo_sql: bool = False,
    ) -> None:
        """
        Connect to the database with configurable pool settings.

        Pool settings are ignored for SQLite, which uses the driver's own
        pool (StaticPool for in-memory databases so every session sees the
        same data).

        Args:
            url: Database connection URL
            pool_size: Number of connections to maintain in the pool (default: 5)
            max_overflow: Max connections beyond pool_size (default: 10)
            pool_timeout: Timeout in seconds for getting a connection (default: 30)
            pool_recycle: Recycle connections after N seconds (default: 3600 = 1 hour)
            pool_pre_ping: Enable connection health checks (default: True)
            echo_sql: Log all SQL statements (default: False)

        Raises:
            RuntimeError: If already connected
        """
        if self._engine is not None:
            raise RuntimeError("Database already connected")

        parsed_url = make_url(url)
        if parsed_url.get_backend_name() == "sqlite":
            engine_options = {"echo": echo_sql}
            if parsed_url.database in (None, "", ":memory:"):
                engine_options["poolclass"] = StaticPool
        else:
            engine_options = {
                "pool_size": pool_size,
                "max_overflow": max_overflow,
                "pool_timeout": pool_timeout,
                "pool_recycle": pool_recycle,
                "pool_pre_ping": pool_pre_ping,
                "echo": echo_sql,
            }

        self._engine = create_async_engine(url, **engine_options)
        self._session_factory = async_sessionmaker(
            self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

        logger.info(
            "database_connected",
            url=parsed_url.render_as_string(hide_password=True),
            backend=parsed_url.get_backend_name(),
        )

    async def connect_from_settings(self, settings: Optional[Settings] = None) -> None:
        """
        Connect using database_url and the db_* pool settings.

        Raises:
            RuntimeError: If database_url is not configured
        """
        settings = settings or get_settings()
        if settings.database_url is None:
            raise RuntimeError("DATABASE_URL is not configured")

        await self.connect(
            url=settings.database_url.get_secret_value(),
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_timeout=settings.db_pool_timeout,
            pool_recycle=settings.db_pool_recycle,
            echo_sql=settings.db_echo_sql,
        )

    async def disconnect(self) -> None:
        """
        Dispose of the engine and close all pooled connections.

        Safe to call multiple times.
        """
        if self._engine:
            logger.info("database_disconnecting")
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None
            logger.info("database_disconnected")

    async def create_all(self) -> None:
        """Create tables for every SQLModel table model imported so far."""
        if not self._engine:
            raise RuntimeError("Database not connected. Call connect() first.")

        async with self._engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Get a database session with automatic commit/rollback.

        Yields:
            AsyncSession: Database session

        Raises:
            RuntimeError: If database not connected

        Usage:
            async with db.session() as session:
                repo = BaseRepository(Product, session)
                await repo.update(1, {"price": 10})
                # session automatically committed on success
        """
        if not self._session_factory:
            raise RuntimeError("Database not connected. Call connect() first.")

        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def health_check(self) -> bool:
        """
        Perform a health check by executing a simple query.

        Returns:
            True if database is healthy, False otherwise
        """
        if not self._engine:
            return False

        try:
            async with self.session() as session:
                await session.execute(select(1))
            return True
        except Exception as e:
            logger.error("database_health_check_failed", error=str(e))
            return False

    @property
    def is_connected(self) -> bool:
        """Check if database is connected."""
        return self._engine is not None


# Global instance
db = DatabaseManager()
