"""Test fixtures."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from pathlib import Path

import pytest
import pytest_asyncio
import structlog
from sqlalchemy.ext.asyncio import AsyncEngine

from registrytokens.config import Config
from registrytokens.database import (
    create_database_engine,
    initialize_registry_database,
)
from registrytokens.factory import Factory

from .support.config import write_config


@pytest.fixture(autouse=True)
def environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear environment variables that would override test settings."""
    settings = ("DATABASE_URL", "DATABASE_PASSWORD", "LOG_LEVEL", "PROFILE")
    for setting in settings:
        monkeypatch.delenv(f"REGISTRY_TOKENS_{setting}", raising=False)


@pytest.fixture
def config_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Write the default test configuration and point the CLI at it."""
    path = write_config(tmp_path)
    monkeypatch.setenv("REGISTRY_TOKENS_CONFIG_PATH", str(path))
    return path


@pytest.fixture
def config(config_path: Path) -> Config:
    """Return the default test configuration.

    Notes
    -----
    This fixture must not be async so that it can be used by the cli tests,
    which must not be async because the command handlers start their own
    asyncio loop.
    """
    config = Config.from_file(config_path)
    config.configure_logging()
    return config


@pytest_asyncio.fixture
async def engine(config: Config) -> AsyncIterator[AsyncEngine]:
    """Create a database engine for testing."""
    engine = create_database_engine(
        config.database_url, config.database_password
    )
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def empty_database(engine: AsyncEngine) -> None:
    """Create empty token and account tables before a test."""
    logger = structlog.get_logger(__name__)
    await initialize_registry_database(engine, logger, reset=True)


@pytest_asyncio.fixture
async def factory(
    empty_database: None, engine: AsyncEngine
) -> AsyncIterator[Factory]:
    """Return a component factory."""
    async with Factory.standalone(engine) as factory:
        yield factory


@pytest.fixture
def retry_delays(monkeypatch: pytest.MonkeyPatch) -> list[float]:
    """Skip waits between database connection attempts.

    Returns the list of requested delays, one per retry.
    """
    delays: list[float] = []

    async def sleep(delay: float) -> None:
        delays.append(delay)

    monkeypatch.setattr(asyncio, "sleep", sleep)
    return delays
