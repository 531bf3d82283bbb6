"""The personal_access_token database table."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    BigInteger,
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
)
from sqlalchemy.orm import Mapped, mapped_column

from .base import SchemaBase

__all__ = ["PersonalAccessToken"]


class PersonalAccessToken(SchemaBase):
    """A personal access token owned by a registry account.

    The token value is deliberately not declared unique. Lookups treat a
    value as matching if any row carries it.
    """

    __tablename__ = "personal_access_token"

    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer(), "sqlite"), primary_key=True
    )
    user_data: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer(), "sqlite"),
        ForeignKey("user_data.id"),
    )
    value: Mapped[str] = mapped_column(String(64))
    active: Mapped[bool] = mapped_column(Boolean, default=True)
    created_timestamp: Mapped[datetime] = mapped_column(DateTime)
    accessed_timestamp: Mapped[datetime | None] = mapped_column(DateTime)
    description: Mapped[str | None] = mapped_column(String(2048))

    __table_args__ = (
        Index("personal_access_token_by_value", "value"),
        Index("personal_access_token_by_user", "user_data"),
    )
