"""Async database engine and session management.

A single ``Database`` is built when the application starts and kept on
``app.state``. Route handlers reach it through ``get_db``, so nothing here
holds a module-level engine.
"""

import logging
import ssl
from collections.abc import AsyncGenerator

from fastapi import Request
from sqlalchemy import event, inspect
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from courtfinder.core.config import Settings

logger = logging.getLogger(__name__)

SPORTS_TABLES = ("sports", "venue_sports")


def build_ssl_context(settings: Settings) -> ssl.SSLContext | None:
    """Build a client TLS context from the configured PEM files, or None."""
    if not (settings.db_ssl_ca or settings.db_ssl_cert or settings.db_ssl_key):
        return None

    context = ssl.create_default_context(cafile=settings.db_ssl_ca)
    if settings.db_ssl_cert:
        context.load_cert_chain(settings.db_ssl_cert, keyfile=settings.db_ssl_key)
    # Managed instances present certificates for an IP, not a hostname
    context.check_hostname = False
    context.verify_mode = ssl.CERT_REQUIRED if settings.db_ssl_ca else ssl.CERT_NONE
    return context


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """Bounded connection pool plus the schema capabilities found at start-up."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self.has_sports = False
        self.engine = self._create_engine(settings)
        self.session_factory = async_sessionmaker(self.engine, class_=AsyncSession, expire_on_commit=False)

    @staticmethod
    def _create_engine(settings: Settings) -> AsyncEngine:
        kwargs: dict = {"echo": settings.database_echo}
        if settings.database_url.startswith("sqlite"):
            engine = create_async_engine(settings.database_url, **kwargs)
            event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
            return engine

        ssl_context = build_ssl_context(settings)
        if ssl_context is not None:
            kwargs["connect_args"] = {"ssl": ssl_context}
        return create_async_engine(
            settings.database_url,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=True,
            **kwargs,
        )

    async def connect(self) -> None:
        """Check connectivity and record which optional tables exist."""
        async with self.engine.connect() as conn:
            tables = await conn.run_sync(lambda sync_conn: set(inspect(sync_conn).get_table_names()))
        self.has_sports = all(name in tables for name in SPORTS_TABLES)
        if not self.has_sports:
            logger.warning("Sports tables not found; venues will be served without sport data")

    async def create_all(self, include_sports: bool = True) -> None:
        """Create tables from the ORM metadata (seed script and tests)."""
        from courtfinder.models import Base, Venue

        async with self.engine.begin() as conn:
            if include_sports:
                await conn.run_sync(Base.metadata.create_all)
            else:
                await conn.run_sync(Base.metadata.create_all, tables=[Venue.__table__])

    async def dispose(self) -> None:
        await self.engine.dispose()


def get_database(request: Request) -> Database:
    return request.app.state.database


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Yield an async database session. Used as a FastAPI dependency.

    Exit code may run after the response is sent, so write routes commit
    themselves before responding; the commit here only closes out reads.
    """
    async with get_database(request).session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
