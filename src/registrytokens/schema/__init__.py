"""All database schema objects."""

from __future__ import annotations

from .base import SchemaBase
from .personal_access_token import PersonalAccessToken
from .user_data import UserData

__all__ = [
    "PersonalAccessToken",
    "SchemaBase",
    "UserData",
]
