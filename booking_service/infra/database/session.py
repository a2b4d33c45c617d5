"""Database engine and session management.

``Database`` owns the async engine (one connection pool per process) and the
session factory. Startup code calls ``connect()`` to wait for the server,
request handlers reach it through ``get_database()``.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import TYPE_CHECKING, Any

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from booking_service.core.database.base import Base
from booking_service.core.settings import get_db_settings
from booking_service.infra.logging import get_lazy_logger
from booking_service.utils.retry import RetryStrategy, retry_async

if TYPE_CHECKING:
    import asyncio

    from sqlalchemy.ext.asyncio import AsyncEngine

    from booking_service.core.settings.postgres import PostgresSettings

logger = logging.getLogger(__name__)
lazy_logger = get_lazy_logger(__name__)


class Database:
    """Async engine plus session factory.

    Args:
        url: SQLAlchemy async URL (``postgresql+psycopg://`` or
            ``sqlite+aiosqlite://``).
        engine: Pre-built engine; ``url`` is ignored when given.
        **engine_kwargs: Forwarded to ``create_async_engine``.
    """

    def __init__(
        self,
        url: str | None = None,
        *,
        engine: AsyncEngine | None = None,
        **engine_kwargs: Any,
    ) -> None:
        if engine is None:
            if url is None:
                msg = "Database requires either a url or an engine"
                raise ValueError(msg)
            engine = create_async_engine(url, **engine_kwargs)
        self._engine = engine
        self._session_factory = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )
        self._connected = False

    @classmethod
    def from_settings(cls, settings: PostgresSettings) -> Database:
        return cls(settings.url, **settings.sqlalchemy_engine_kwargs())

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    @property
    def is_connected(self) -> bool:
        return self._connected

    @property
    def safe_url(self) -> str:
        """Engine URL with the password masked, for logs."""
        return make_url(str(self._engine.url)).render_as_string(hide_password=True)

    def session(self) -> AsyncSession:
        """Open a new session; use it as an async context manager."""
        return self._session_factory()

    async def test_connection(self) -> None:
        """Run ``SELECT 1``; raises whatever the driver raises."""
        async with self._engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def ping(self) -> bool:
        """Return whether the database answers ``SELECT 1``."""
        try:
            await self.test_connection()
        except Exception as e:
            logger.warning(
                "Database ping failed",
                extra={"url": self.safe_url, "error": str(e)},
            )
            return False
        return True

    async def connect(
        self,
        *,
        max_retries: int = 5,
        initial_delay: float = 1.0,
        max_delay: float = 30.0,
        abort: asyncio.Event | None = None,
    ) -> None:
        """Wait until the database accepts connections.

        Retries ``test_connection`` with exponential backoff. Setting
        ``abort`` interrupts the loop, including a pending backoff sleep.

        Raises:
            RetryError: The database stayed unreachable for ``max_retries`` attempts.
            AbortError: ``abort`` was set first.
        """
        logger.info(
            "Initializing database connection with retry",
            extra={
                "url": self.safe_url,
                "max_attempts": max_retries,
                "initial_delay": initial_delay,
            },
        )
        await retry_async(
            self.test_connection,
            strategy=RetryStrategy(
                max_attempts=max_retries,
                initial_delay=initial_delay,
                max_delay=max_delay,
                retry_on=(SQLAlchemyError, OSError),
            ),
            abort=abort,
            operation="db.connect",
        )
        self._connected = True
        logger.info(
            "Database connection established successfully",
            extra={"url": self.safe_url, "driver": self._engine.dialect.driver},
        )

    async def disconnect(self) -> None:
        """Dispose of the connection pool."""
        logger.info("Closing database connection", extra={"url": self.safe_url})
        await self._engine.dispose()
        self._connected = False
        logger.info("Database connection closed successfully")

    async def create_schema(self) -> None:
        """Create all tables known to ``Base.metadata`` (local and test databases)."""
        import booking_service.features.models  # noqa: F401  registers every table

        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        lazy_logger.debug(lambda: f"db.create_schema: {sorted(Base.metadata.tables)}")


@lru_cache(maxsize=1)
def get_database() -> Database:
    """Process-wide ``Database`` built from ``PostgresSettings``.

    Also the FastAPI dependency; tests override it with a database bound to
    an in-memory engine.
    """
    return Database.from_settings(get_db_settings())
