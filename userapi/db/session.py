"""
Persistence gateway - opens the datastore, reconciles the schema, hands out sessions.
Challenge: Connection pooling, request-scoped sessions, proper cleanup.
Design: One Database object per app, stored on app.state and injected per request (no import-time engine).
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy import Connection, inspect, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from userapi.core.errors import DatabaseUnavailableError
from userapi.db.base import Base
from userapi.db import models  # noqa: F401 - ensure models are registered on Base.metadata

logger = logging.getLogger(__name__)


def _reconcile_schema(conn: Connection) -> None:
    """Create missing tables, then add columns and indexes an older table lacks."""
    Base.metadata.create_all(conn)
    inspector = inspect(conn)
    for table in Base.metadata.sorted_tables:
        existing_columns = {c["name"] for c in inspector.get_columns(table.name)}
        for column in table.columns:
            if column.name in existing_columns:
                continue
            # Added as nullable without default: SQLite cannot ALTER in a NOT NULL or non-constant default
            ddl_type = column.type.compile(dialect=conn.dialect)
            conn.execute(text(f'ALTER TABLE "{table.name}" ADD COLUMN "{column.name}" {ddl_type}'))
            logger.info("Added column %s.%s", table.name, column.name)

        existing_indexes = {ix["name"] for ix in inspector.get_indexes(table.name)}
        for index in table.indexes:
            if index.name not in existing_indexes:
                index.create(conn)
                logger.info("Created index %s", index.name)


class Database:
    """Engine plus session factory. Shared by all requests; each request gets its own session."""

    def __init__(self, database_url: str, echo: bool = False):
        self.url = database_url
        self.engine = create_async_engine(
            database_url,
            echo=echo,
            pool_pre_ping=True,  # Verify connections before use
        )
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    async def ensure_schema(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(_reconcile_schema)

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide a session that rolls back on error and always closes."""
        async with self._session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    async def dispose(self) -> None:
        await self.engine.dispose()


async def open_database(database_url: str, echo: bool = False) -> Database:
    """Open or create the datastore and make sure the users table matches the models.

    Raises DatabaseUnavailableError when the datastore cannot be opened; callers
    treat that as fatal.
    """
    database = Database(database_url, echo=echo)
    try:
        await database.ensure_schema()
    except (SQLAlchemyError, OSError) as e:
        await database.dispose()
        logger.critical("Error opening database: %s", e)
        raise DatabaseUnavailableError(f"Error opening database: {e}") from e
    logger.info("Database initialized")
    return database


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Yield a database session per request from the app's Database."""
    database: Database = request.app.state.database
    async with database.session() as session:
        yield session


# Type alias for FastAPI dependency injection
DbSession = Annotated[AsyncSession, Depends(get_db)]
