from __future__ import annotations

import logging
from typing import Any, Generic, Optional, Type, TypeVar

from flask import g, has_request_context, request, session

from ..common.datetime_utils import days_from_today
from ..core.constants import DEFAULT_COOKIE_KEY, DEFAULT_REMEMBER_ME_DAYS
from ..core.registry import ServiceRegistry
from ..users.capabilities import AuthUser
from ..users.model import User
from ..users.service import UserService
from ..web.cookies import peek_response_cookie
from .base import ManageProvider
from .helper import get_cookie_key, save_cookie

logger = logging.getLogger(__name__)

TUser = TypeVar("TUser", bound=User)


def _remote_addr() -> Optional[str]:
    return request.remote_addr if has_request_context() else None


class SessionManageProvider(ManageProvider, Generic[TUser]):
    """Provider that keeps the current user in the Flask session.

    The session only stores the user id under ``cookie_key``; the loaded user
    is cached on ``flask.g`` for the rest of the request. Outside a request
    every ``current`` operation is a silent no-op.
    """

    user_type: Type[TUser] = User

    def __init__(
        self,
        users: UserService,
        registry: Optional[ServiceRegistry] = None,
        *,
        cookie_key: str = DEFAULT_COOKIE_KEY,
        remember_days: int = DEFAULT_REMEMBER_ME_DAYS,
    ):
        super().__init__(registry, cookie_key=cookie_key)
        self._users = users
        self.remember_days = remember_days

    @property
    def _cache_attr(self) -> str:
        return f"_membership_user_{self.cookie_key}"

    def get_current(self) -> Optional[TUser]:
        if not has_request_context():
            return None

        user_id = session.get(self.cookie_key)
        if user_id is None:
            return None

        cached = g.get(self._cache_attr)
        if cached is not None and cached.user_id == user_id:
            return cached

        user = self.find_by_id(user_id)
        if user is None:
            # account is gone, forget the stale entry
            session.pop(self.cookie_key, None)
            return None
        setattr(g, self._cache_attr, user)
        return user

    def set_current(self, value: Optional[TUser]) -> None:
        if not has_request_context():
            return

        if value is None:
            previous = self.get_current()
            session.pop(self.cookie_key, None)
            g.pop(self._cache_attr, None)

            if isinstance(previous, AuthUser):
                self._users.logout(previous, ip=_remote_addr())
        else:
            session[self.cookie_key] = value.user_id
            setattr(g, self._cache_attr, value)

    def find_by_id(self, user_id: Any) -> Optional[TUser]:
        return self._users.find_by_id(int(user_id))

    def find_by_name(self, name: str) -> Optional[TUser]:
        return self._users.find_by_name(name)

    def login(self, name: str, password: str, remember_me: bool = False) -> Optional[TUser]:
        user = self._users.login(name, password, ip=_remote_addr())
        if user is None:
            save_cookie(self, None)
            return None

        self.current = user
        # session cookie by default, replaces whatever identity the browser held
        save_cookie(self, user)
        if remember_me:
            cookie = peek_response_cookie(get_cookie_key(self))
            if cookie is not None and not cookie.expired:
                cookie.expires = days_from_today(self.remember_days)

        logger.debug("user %s logged in (remember_me=%s)", user.name, remember_me)
        return user

    def logout(self) -> None:
        super().logout()
        save_cookie(self, None)

    def register(self, name: str, password: str, role_id: int = 0, enabled: bool = False) -> TUser:
        user = self.user_type(
            user_id=0,
            name=name,
            password=password,
            role_id=int(role_id),
            enabled=bool(enabled),
        )
        return self._users.register(user, ip=_remote_addr())


class DefaultManageProvider(SessionManageProvider[User]):
    """Provider bound to the built-in ``User`` entity."""
