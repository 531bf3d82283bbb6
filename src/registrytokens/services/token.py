"""Answer questions about personal access tokens."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession
from structlog.stdlib import BoundLogger

from ..storage.token import AccessTokenStore

__all__ = ["TokenLookupService"]


class TokenLookupService:
    """Look up personal access tokens.

    Each lookup runs in its own read-only transaction. Token values are
    credentials and are never logged.

    Parameters
    ----------
    token_store
        The backing store for personal access tokens.
    session
        Database session.
    logger
        Logger to use for messages.
    """

    def __init__(
        self,
        *,
        token_store: AccessTokenStore,
        session: AsyncSession,
        logger: BoundLogger,
    ) -> None:
        self._token_store = token_store
        self._session = session
        self._logger = logger

    async def has_token(self, value: str) -> bool:
        """Check whether a token value is known.

        Parameters
        ----------
        value
            The full token value.

        Returns
        -------
        bool
            Whether any stored token, active or not, has that value.
        """
        async with self._session.begin():
            found = await self._token_store.has_token(value)
        self._logger.debug("Checked for token", found=found)
        return found

    async def is_admin_token(self, value: str) -> bool:
        """Check whether a token value grants admin access.

        Parameters
        ----------
        value
            The full token value.

        Returns
        -------
        bool
            Whether an active token with that value belongs to an admin.
        """
        async with self._session.begin():
            is_admin = await self._token_store.is_admin_token(value)
        self._logger.debug("Checked for admin token", is_admin=is_admin)
        return is_admin
