"""Enums used in registry-tokens models.

Notes
-----
These are kept in a separate module because both the ORM schema and the
storage layer refer to them, and the schema must not import the storage layer.
"""

from __future__ import annotations

from enum import Enum

__all__ = ["Role"]


class Role(Enum):
    """Role of a registry account.

    Regular accounts have no role at all, which is stored as ``NULL``.
    """

    admin = "admin"
    """Registry administrator, allowed to use the admin API."""

    privileged = "privileged"
    """Trusted publisher with elevated rights, but not an administrator."""
