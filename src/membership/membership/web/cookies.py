"""Per-request cookie buffer.

Views and helpers queue cookies here while the request runs; the
``after_request`` hook installed by ``init_app`` copies them onto the
response. Cookie values hold ``key=value`` sub-fields joined by ``&``.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Optional

from flask import current_app, g, has_request_context, request

from ..common.datetime_utils import days_from_today
from ..core.constants import EXPIRED_COOKIE_DAYS

_PENDING_ATTR = "_membership_response_cookies"


@dataclass
class ResponseCookie:
    key: str
    values: Dict[str, str] = field(default_factory=dict)
    expires: Optional[datetime] = None

    @property
    def value(self) -> str:
        return "&".join(f"{k}={v}" for k, v in self.values.items())

    def expire(self) -> None:
        self.values.clear()
        self.expires = days_from_today(-EXPIRED_COOKIE_DAYS)

    @property
    def expired(self) -> bool:
        return not self.values and self.expires is not None


def parse_cookie_values(raw: Optional[str]) -> Dict[str, str]:
    """Split ``u=a&p=b`` into its sub-fields. Values are left encoded."""
    out: Dict[str, str] = {}
    for part in (raw or "").split("&"):
        if not part:
            continue
        name, _, value = part.partition("=")
        out[name] = value
    return out


def request_cookie(key: str) -> Optional[Dict[str, str]]:
    """Sub-fields of the cookie the client sent, ``None`` if absent."""
    if not has_request_context():
        return None
    raw = request.cookies.get(key)
    if raw is None:
        return None
    return parse_cookie_values(raw)


def response_cookies() -> Dict[str, ResponseCookie]:
    pending = g.get(_PENDING_ATTR)
    if pending is None:
        pending = {}
        setattr(g, _PENDING_ATTR, pending)
    return pending


def response_cookie(key: str) -> ResponseCookie:
    """Pending cookie for ``key``, created on first use."""
    pending = response_cookies()
    cookie = pending.get(key)
    if cookie is None:
        cookie = pending[key] = ResponseCookie(key)
    return cookie


def peek_response_cookie(key: str) -> Optional[ResponseCookie]:
    if not has_request_context():
        return None
    return (g.get(_PENDING_ATTR) or {}).get(key)


def apply_response_cookies(response):
    for cookie in (g.get(_PENDING_ATTR) or {}).values():
        response.set_cookie(
            cookie.key,
            cookie.value,
            expires=cookie.expires,
            path="/",
            httponly=True,
            samesite="Lax",
            secure=bool(current_app.config.get("SESSION_COOKIE_SECURE", False)),
        )
    return response
