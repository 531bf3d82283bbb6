"""Create registry-tokens components."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import aclosing, asynccontextmanager
from typing import Self

import structlog
from safir.database import create_async_session
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession
from structlog.stdlib import BoundLogger

from .schema import PersonalAccessToken as SQLToken
from .services.token import TokenLookupService
from .storage.token import AccessTokenStore

__all__ = ["Factory"]


class Factory:
    """Build registry-tokens components.

    Parameters
    ----------
    session
        Database session.
    logger
        Logger passed to services for reporting lookup results.
    """

    @classmethod
    async def create(
        cls, engine: AsyncEngine, *, check_db: bool = False
    ) -> Self:
        """Create a component factory.

        This class method should only be used in situations where an async
        context manager cannot be used. If an async context manager can be
        used, call `standalone` rather than this method.

        Parameters
        ----------
        engine
            Database engine to use for connections.
        check_db
            If set to `True`, check database connectivity before returning by
            doing a simple query, retrying while the database is unreachable.

        Returns
        -------
        Factory
            Newly-created factory. The caller must call `aclose` on the
            returned object during shutdown.
        """
        logger = structlog.get_logger("registrytokens")
        statement = select(SQLToken) if check_db else None
        session = await create_async_session(engine, statement=statement)
        return cls(session, logger)

    @classmethod
    @asynccontextmanager
    async def standalone(
        cls, engine: AsyncEngine, *, check_db: bool = False
    ) -> AsyncIterator[Self]:
        """Async context manager for registry-tokens components.

        Parameters
        ----------
        engine
            Database engine to use for connections.
        check_db
            If set to `True`, check database connectivity before returning by
            doing a simple query.

        Yields
        ------
        Factory
            The factory. Must be used as an async context manager.

        Examples
        --------
        .. code-block:: python

           async with Factory.standalone(engine) as factory:
               token_service = factory.create_token_lookup_service()
               is_admin = await token_service.is_admin_token(value)
        """
        factory = await cls.create(engine, check_db=check_db)
        async with aclosing(factory):
            yield factory

    def __init__(self, session: AsyncSession, logger: BoundLogger) -> None:
        self.session = session
        self._logger = logger

    async def aclose(self) -> None:
        """Shut down the factory.

        After this method is called, the factory object is no longer valid and
        must not be used.
        """
        await self.session.close()

    def create_token_lookup_service(self) -> TokenLookupService:
        """Create the service for personal access token lookups.

        Returns
        -------
        TokenLookupService
            Newly-created token lookup service.
        """
        return TokenLookupService(
            token_store=self.create_token_store(),
            session=self.session,
            logger=self._logger,
        )

    def create_token_store(self) -> AccessTokenStore:
        """Create the storage layer for personal access tokens.

        Returns
        -------
        AccessTokenStore
            Newly-created token store.
        """
        return AccessTokenStore(self.session)
