from __future__ import annotations

from enum import Enum


class LogCategory(str, Enum):
    """Audit log categories."""

    USER = "User"
    ROLE = "Role"


class LogAction(str, Enum):
    """Audit log actions written by the membership layer."""

    LOGIN = "Login"
    AUTO_LOGIN = "AutoLogin"
    LOGOUT = "Logout"
    REGISTER = "Register"
