"""Optional capabilities a user object may have.

The provider and the cookie helper only rely on these shapes, checked with
``isinstance`` at the call site, so any user type with the right attributes
can be plugged in.
"""
from __future__ import annotations

from typing import Any, Protocol, Sequence, runtime_checkable


@runtime_checkable
class ManageUser(Protocol):
    user_id: Any
    name: str
    enabled: bool


@runtime_checkable
class AuthUser(ManageUser, Protocol):
    """A user that carries credentials and an online flag."""

    password: str
    online: bool


@runtime_checkable
class RoleHolder(Protocol):
    roles: Sequence[Any]


@runtime_checkable
class Identity(Protocol):
    name: str
    is_authenticated: bool
