from __future__ import annotations

from typing import Optional, Protocol

from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Note: the service layer depends on this interface, not on a concrete DB.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_name(self, name: str) -> Optional[User]:
        raise NotImplementedError

    def create_user(self, user: User) -> int:
        raise NotImplementedError

    def save(self, user: User) -> bool:
        raise NotImplementedError
