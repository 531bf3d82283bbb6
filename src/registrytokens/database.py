"""Database utility functions for registry-tokens."""

from __future__ import annotations

from pydantic import SecretStr
from safir.database import initialize_database
from sqlalchemy import URL, Connection, inspect
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from structlog.stdlib import BoundLogger

from .schema import SchemaBase

__all__ = [
    "build_database_url",
    "create_database_engine",
    "initialize_registry_database",
    "is_database_initialized",
]


def build_database_url(url: str, password: str | SecretStr | None) -> URL:
    """Build the URL used to connect to the database.

    Parameters
    ----------
    url
        Configured database URL.
    password
        Password to add to the URL, if any.

    Returns
    -------
    sqlalchemy.URL
        URL using an async driver, with the password inserted.
    """
    parsed = make_url(url)
    if parsed.drivername == "postgresql":
        parsed = parsed.set(drivername="postgresql+asyncpg")
    if isinstance(password, SecretStr):
        password = password.get_secret_value()
    if password:
        parsed = parsed.set(password=password)
    return parsed


def create_database_engine(
    url: str, password: str | SecretStr | None
) -> AsyncEngine:
    """Create a new async database engine.

    Parameters
    ----------
    url
        Configured database URL.
    password
        Password for the database, if not included in the URL.

    Returns
    -------
    sqlalchemy.ext.asyncio.AsyncEngine
        Newly-created engine. The caller is responsible for disposing of it.
    """
    return create_async_engine(build_database_url(url, password))


async def initialize_registry_database(
    engine: AsyncEngine, logger: BoundLogger, *, reset: bool = False
) -> None:
    """Create the registry-tokens tables.

    Parameters
    ----------
    engine
        Database engine to use.
    logger
        Logger to use for status reporting.
    reset
        If set, drop all tables first. Only useful for test suites.

    Raises
    ------
    safir.database.DatabaseInitializationError
        Raised if the database still cannot be reached after several tries.
    """
    await initialize_database(
        engine, logger, schema=SchemaBase.metadata, reset=reset
    )


async def is_database_initialized(
    engine: AsyncEngine, logger: BoundLogger
) -> bool:
    """Check whether the database has been initialized.

    Parameters
    ----------
    engine
        Database engine to use.
    logger
        Logger to use for status reporting.

    Returns
    -------
    bool
        `True` if the token and account tables exist, `False` otherwise. This
        does not check columns or indices.
    """

    def has_tables(connection: Connection) -> bool:
        inspector = inspect(connection)
        return all(
            inspector.has_table(t.name)
            for t in SchemaBase.metadata.sorted_tables
        )

    async with engine.connect() as connection:
        initialized = await connection.run_sync(has_tables)
    if not initialized:
        logger.info("Database appears not to be initialized")
    return initialized
