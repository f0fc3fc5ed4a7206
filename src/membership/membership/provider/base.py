from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional, Type, TypeVar

from ..core.constants import DEFAULT_COOKIE_KEY
from ..core.registry import ServiceRegistry

T = TypeVar("T")


class ManageProvider(ABC):
    """Authentication and registration facade.

    Locates the current user, finds users, logs them in and out and registers
    new accounts. Kept small so a custom backend only needs one user type
    that satisfies ``users.capabilities.ManageUser``.

    ``cookie_key`` names both the session entry and the remember-me cookie.
    """

    def __init__(self, registry: Optional[ServiceRegistry] = None, *, cookie_key: str = DEFAULT_COOKIE_KEY):
        self._registry = registry
        self.cookie_key = cookie_key

    @property
    def current(self) -> Optional[Any]:
        """Logged-in user; assign ``None`` to log out."""
        return self.get_current()

    @current.setter
    def current(self, value: Optional[Any]) -> None:
        self.set_current(value)

    @abstractmethod
    def get_current(self) -> Optional[Any]:
        raise NotImplementedError

    @abstractmethod
    def set_current(self, value: Optional[Any]) -> None:
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, user_id: Any) -> Optional[Any]:
        raise NotImplementedError

    @abstractmethod
    def find_by_name(self, name: str) -> Optional[Any]:
        raise NotImplementedError

    @abstractmethod
    def login(self, name: str, password: str, remember_me: bool = False) -> Optional[Any]:
        raise NotImplementedError

    def logout(self) -> None:
        self.current = None

    @abstractmethod
    def register(self, name: str, password: str, role_id: int = 0, enabled: bool = False) -> Any:
        raise NotImplementedError

    def get_service(self, service_type: Type[T]) -> Optional[T]:
        """Resolve any registered dependency; not limited to authentication."""
        if self._registry is None:
            return None
        return self._registry.resolve(service_type)
