"""The user_data database table."""

from __future__ import annotations

from sqlalchemy import BigInteger, Enum, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from ..models.enums import Role
from .base import SchemaBase

__all__ = ["UserData"]


class UserData(SchemaBase):
    """A registry account.

    Accounts are created and maintained by the registry itself. This project
    only reads the ``role`` column to decide whether an account is an admin.
    """

    __tablename__ = "user_data"

    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer(), "sqlite"), primary_key=True
    )
    role: Mapped[Role | None] = mapped_column(
        Enum(
            Role,
            native_enum=False,
            length=32,
            values_callable=lambda e: [m.value for m in e],
        )
    )
    login_name: Mapped[str] = mapped_column(String(255))
    full_name: Mapped[str | None] = mapped_column(String(255))
    email: Mapped[str | None] = mapped_column(String(255))
    provider: Mapped[str | None] = mapped_column(String(32))
