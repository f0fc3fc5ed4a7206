from __future__ import annotations

import logging
from functools import wraps
from typing import Optional

from flask import Flask, abort, current_app, got_request_exception, has_app_context
from werkzeug.local import LocalProxy

from ..provider.base import ManageProvider
from ..provider.helper import describe_user, load_cookie, set_principal
from ..provider.principal import get_principal
from .cookies import apply_response_cookies

logger = logging.getLogger(__name__)

EXTENSION_KEY = "membership"


def get_provider(app: Optional[Flask] = None) -> Optional[ManageProvider]:
    if app is None:
        if not has_app_context():
            return None
        app = current_app
    return app.extensions.get(EXTENSION_KEY)


def _current_user():
    provider = get_provider()
    return provider.current if provider is not None else None


current_user = LocalProxy(_current_user)


def _log_error_info(sender: Flask, exception: Exception, **extra) -> None:
    provider = get_provider(sender)
    if provider is None:
        return
    info = describe_user(provider)
    if info:
        sender.logger.error("%s while handling request: %s", type(exception).__name__, info)


def init_app(app: Flask, provider: ManageProvider, *, auto_login: bool = True) -> None:
    """Wire ``provider`` into ``app``.

    Before each request a user missing from the session is restored from the
    remember-me cookie, then the principal is attached. After each request
    pending cookies are written to the response.
    """
    app.extensions[EXTENSION_KEY] = provider

    @app.before_request
    def _restore_current_user():
        if provider.current is None:
            user = load_cookie(provider, autologin=auto_login)
            if user is not None:
                provider.current = user
                logger.debug("restored %s from remember-me cookie", user.name)
        set_principal(provider)

    app.after_request(apply_response_cookies)
    got_request_exception.connect(_log_error_info, app)


def roles_required(*roles: str):
    """401 for anonymous requests, 403 unless the principal has one of ``roles``."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            principal = get_principal()
            if principal is None:
                abort(401)
            if roles and not any(principal.is_in_role(r) for r in roles):
                abort(403)
            return view(*args, **kwargs)

        return wrapper

    return decorator
