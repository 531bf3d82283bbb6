"""Storage for personal access tokens."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.enums import Role
from ..schema import PersonalAccessToken as SQLToken
from ..schema import UserData as SQLUserData

__all__ = ["AccessTokenStore"]


class AccessTokenStore:
    """Answers existence questions about personal access tokens.

    The tokens and the accounts that own them are written by the registry,
    not by this class. Every query is an existence check: it asks the
    database whether any matching row exists and never loads row data.

    All methods must be called inside a transaction.

    Parameters
    ----------
    session
        The database session.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def has_token(self, value: str) -> bool:
        """Check whether a token value is known.

        Parameters
        ----------
        value
            The full token value.

        Returns
        -------
        bool
            `True` if at least one stored token has exactly that value,
            whether or not it is active, `False` otherwise.
        """
        stmt = select(SQLToken.id).where(SQLToken.value == value).exists()
        return bool(await self._session.scalar(select(stmt)))

    async def is_admin_token(self, value: str) -> bool:
        """Check whether a token value grants admin access.

        Parameters
        ----------
        value
            The full token value.

        Returns
        -------
        bool
            `True` if at least one stored token has exactly that value, is
            active, and belongs to an account with the admin role, `False`
            otherwise.
        """
        stmt = (
            select(SQLToken.id)
            .join(SQLUserData, SQLUserData.id == SQLToken.user_data)
            .where(
                SQLToken.value == value,
                SQLToken.active.is_(True),
                SQLUserData.role == Role.admin,
            )
            .exists()
        )
        return bool(await self._session.scalar(select(stmt)))
