"""Tests for the token lookup service."""

from __future__ import annotations

import logging

import pytest
from sqlalchemy.exc import DBAPIError

from registrytokens.config import Config
from registrytokens.database import create_database_engine
from registrytokens.factory import Factory
from registrytokens.models.enums import Role

from ..support.tokens import add_account, add_token


@pytest.mark.asyncio
async def test_lookups(factory: Factory) -> None:
    token_service = factory.create_token_lookup_service()
    admin = await add_account(factory, "admin", role=Role.admin)
    regular = await add_account(factory, "someuser")
    await add_token(factory, "admin-token", owner=admin)
    await add_token(factory, "user-token", owner=regular)
    await add_token(factory, "old-admin-token", owner=admin, active=False)

    assert await token_service.has_token("admin-token")
    assert await token_service.is_admin_token("admin-token")
    assert await token_service.has_token("user-token")
    assert not await token_service.is_admin_token("user-token")
    assert await token_service.has_token("old-admin-token")
    assert not await token_service.is_admin_token("old-admin-token")
    assert not await token_service.has_token("nonexistent")
    assert not await token_service.is_admin_token("nonexistent")

    # Repeating a lookup gives the same answer.
    assert await token_service.is_admin_token("admin-token")
    assert not await token_service.is_admin_token("user-token")


@pytest.mark.asyncio
async def test_logging(
    factory: Factory, caplog: pytest.LogCaptureFixture
) -> None:
    caplog.set_level(logging.DEBUG, logger="registrytokens")
    token_service = factory.create_token_lookup_service()
    admin = await add_account(factory, "admin", role=Role.admin)
    await add_token(factory, "gt-very-secret-value", owner=admin)

    assert await token_service.has_token("gt-very-secret-value")
    assert await token_service.is_admin_token("gt-very-secret-value")

    assert "Checked for token" in caplog.text
    assert "Checked for admin token" in caplog.text
    assert "gt-very-secret-value" not in caplog.text


@pytest.mark.asyncio
async def test_errors_propagate(config: Config) -> None:
    """Database errors reach the caller unchanged.

    The schema is never created here, so every query fails.
    """
    engine = create_database_engine(
        config.database_url, config.database_password
    )
    try:
        async with Factory.standalone(engine) as factory:
            token_service = factory.create_token_lookup_service()
            with pytest.raises(DBAPIError):
                await token_service.has_token("some-token")
            with pytest.raises(DBAPIError):
                await token_service.is_admin_token("some-token")
    finally:
        await engine.dispose()
