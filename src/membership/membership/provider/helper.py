"""Remember-me cookie and principal helpers for any ``ManageProvider``.

``load_cookie`` with ``autologin=True`` is a write: it records the login on
the user and writes an audit entry. Pass ``autologin=False`` for a pure
credential check.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional
from urllib.parse import quote, unquote

from flask import has_request_context, request

from ..core.constants import COOKIE_PASSWORD_FIELD, COOKIE_USER_FIELD, FALLBACK_COOKIE_KEY
from ..core.enums import LogAction, LogCategory
from ..common.security import equal_ignore_case
from ..logs.service import LogProvider
from ..users.capabilities import AuthUser, Identity, RoleHolder
from ..users.service import UserService
from ..web.cookies import request_cookie, response_cookie
from .principal import Principal, attach_principal

if TYPE_CHECKING:
    from .base import ManageProvider

logger = logging.getLogger(__name__)


def get_cookie_key(provider: "ManageProvider") -> str:
    return getattr(provider, "cookie_key", None) or FALLBACK_COOKIE_KEY


def set_principal(provider: "ManageProvider") -> Optional[Principal]:
    if not has_request_context():
        return None

    user = provider.current
    if user is None or not isinstance(user, Identity):
        return None

    roles: tuple[str, ...] = ()
    if isinstance(user, RoleHolder):
        roles = tuple(str(r) for r in user.roles)

    principal = Principal(identity=user, roles=roles)
    attach_principal(principal)
    return principal


def load_cookie(provider: "ManageProvider", autologin: bool = True) -> Optional[Any]:
    """User named by a valid remember-me cookie, else ``None``."""
    values = request_cookie(get_cookie_key(provider))
    if not values:
        return None

    name = unquote(values.get(COOKIE_USER_FIELD) or "")
    digest = values.get(COOKIE_PASSWORD_FIELD) or ""
    if not name or not digest:
        return None

    user = provider.find_by_name(name)
    if user is None or not user.enabled:
        return None
    if not isinstance(user, AuthUser) or not equal_ignore_case(digest, user.password):
        logger.info("remember-me cookie for %r no longer matches", name)
        return None

    if autologin:
        ip = request.remote_addr
        users = provider.get_service(UserService)
        if users is not None:
            users.save_login(user, ip=ip)
        logs = provider.get_service(LogProvider)
        if logs is not None:
            logs.write_log(LogCategory.USER, LogAction.AUTO_LOGIN, name, user.user_id, str(user), ip=ip)

    return user


def save_cookie(provider: "ManageProvider", user: Optional[Any]) -> None:
    if not has_request_context():
        return

    key = get_cookie_key(provider)
    if isinstance(user, AuthUser):
        u = quote(user.name, safe="")
        p = user.password or ""
        existing = request_cookie(key)
        # Rewriting an identical cookie would drop its persistent expiry.
        if existing is None or existing.get(COOKIE_USER_FIELD) != u or existing.get(COOKIE_PASSWORD_FIELD) != p:
            cookie = response_cookie(key)
            cookie.values[COOKIE_USER_FIELD] = u
            cookie.values[COOKIE_PASSWORD_FIELD] = p
            cookie.expires = None
    else:
        response_cookie(key).expire()


def describe_user(provider: "ManageProvider") -> Optional[str]:
    """One line naming the logged-in user and roles, for error reports."""
    user = provider.current
    if user is None:
        return None
    roles = [str(r) for r in user.roles] if isinstance(user, RoleHolder) else []
    if roles:
        return f"Login: {user.name}({', '.join(roles)})"
    return f"Login: {user.name}"
