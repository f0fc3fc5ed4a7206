from __future__ import annotations

import logging

from flask import Flask, abort, jsonify, request

from ..container import Container
from ..core.constants import DEFAULT_ADMIN_ROLE_NAME
from ..core.exceptions import ValidationError
from ..provider.principal import get_principal
from ..web.extension import roles_required

logger = logging.getLogger(__name__)

_TRUTHY = {"1", "true", "on", "yes"}


def _payload() -> dict:
    if request.is_json:
        return request.get_json(silent=True) or {}
    return request.form.to_dict()


def _flag(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value or "").strip().lower() in _TRUTHY


def register(app: Flask, container: Container) -> None:
    provider = container.manage_provider
    admin_role = app.config.get("ADMIN_ROLE_NAME", DEFAULT_ADMIN_ROLE_NAME)

    @app.route("/login", methods=["POST"], endpoint="login")
    def login():
        data = _payload()
        username = data.get("username", "")
        password = data.get("password", "")

        user = provider.login(username, password, _flag(data.get("remember_me")))
        if user is None:
            return jsonify({"error": "Invalid username or password"}), 401
        return jsonify({"user": user.to_dict()})

    @app.route("/logout", methods=["GET", "POST"], endpoint="logout")
    def logout():
        provider.logout()
        return jsonify({"ok": True})

    @app.route("/register", methods=["POST"], endpoint="register")
    def register_user():
        data = _payload()
        try:
            user = provider.register(
                data.get("username", ""),
                data.get("password", ""),
                int(app.config.get("REGISTER_ROLE_ID", 0)),
                bool(app.config.get("REGISTER_ENABLED", True)),
            )
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400

        logger.info("registered user %s (id=%s)", user.name, user.user_id)
        return jsonify({"user": user.to_dict()}), 201

    @app.route("/me", endpoint="me")
    def me():
        user = provider.current
        if user is None:
            return jsonify({"error": "Not logged in"}), 401

        principal = get_principal()
        body = user.to_dict()
        body["principal_roles"] = list(principal.roles) if principal else []
        return jsonify({"user": body})

    @app.route("/admin/users/<int:user_id>", endpoint="admin_user")
    @roles_required(admin_role)
    def admin_user(user_id: int):
        user = provider.find_by_id(user_id)
        if user is None:
            abort(404)
        return jsonify({"user": user.to_dict()})
