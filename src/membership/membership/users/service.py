from __future__ import annotations

import dataclasses
import logging
from typing import Callable, Optional

from ..common.datetime_utils import now_local
from ..common.security import equal_ignore_case, md5_hex
from ..common.validators import require_max_length, require_non_empty
from ..core.enums import LogAction, LogCategory
from ..core.exceptions import DuplicateUserError
from ..logs.service import LogProvider
from ..roles.repository import RoleRepository
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)


class UserService:
    """Entity layer for users: lookup, credential check, login bookkeeping, registration.

    Lookups return ``None`` for unknown users. Failed logins return ``None``
    as well so callers cannot tell which check failed.
    """

    def __init__(
        self,
        users: UserRepository,
        roles: Optional[RoleRepository] = None,
        logs: Optional[LogProvider] = None,
        *,
        clock: Callable = now_local,
    ):
        self._users = users
        self._roles = roles
        self._logs = logs
        self._clock = clock

    def _with_roles(self, user: Optional[User]) -> Optional[User]:
        if user is None or self._roles is None:
            return user
        role_ids = user.all_role_ids()
        roles = tuple(self._roles.list_by_ids(role_ids)) if role_ids else ()
        return dataclasses.replace(user, roles=roles)

    def _write_log(self, action: LogAction, user: User, *, ip: Optional[str] = None) -> None:
        if self._logs is not None:
            self._logs.write_log(LogCategory.USER, action, user.name, user.user_id, str(user), ip=ip)

    def find_by_id(self, user_id: int) -> Optional[User]:
        return self._with_roles(self._users.get_by_id(int(user_id)))

    def find_by_name(self, name: str) -> Optional[User]:
        if not name:
            return None
        return self._with_roles(self._users.get_by_name(name))

    @staticmethod
    def hash_password(password: str) -> str:
        return md5_hex(password)

    def check_password(self, user: User, password: str) -> bool:
        if not user.password or password is None:
            return False
        return equal_ignore_case(user.password, self.hash_password(password))

    def login(self, name: str, password: str, *, ip: Optional[str] = None) -> Optional[User]:
        user = self.find_by_name(name)
        if user is None or not user.enabled:
            logger.info("login rejected for %r: unknown or disabled", name)
            return None
        if not self.check_password(user, password):
            logger.info("login rejected for %r: bad password", name)
            return None

        self.save_login(user, ip=ip)
        self._write_log(LogAction.LOGIN, user, ip=ip)
        return user

    def save_login(self, user: User, *, ip: Optional[str] = None) -> User:
        user.online = True
        user.logins += 1
        user.last_login = self._clock()
        user.last_login_ip = ip
        self._users.save(user)
        return user

    def logout(self, user: User, *, ip: Optional[str] = None) -> User:
        user.online = False
        self._users.save(user)
        self._write_log(LogAction.LOGOUT, user, ip=ip)
        return user

    def register(self, user: User, *, ip: Optional[str] = None) -> User:
        """Validate, hash the password and persist a new user (``user_id`` is filled in)."""
        user.name = require_non_empty(user.name, "Name")
        require_max_length(user.name, "Name", 50)
        require_non_empty(user.password, "Password")

        if self._users.get_by_name(user.name):
            raise DuplicateUserError(f"User {user.name!r} already exists")

        user.password = self.hash_password(user.password)
        if not user.display_name:
            user.display_name = user.name
        user.registered_at = self._clock()
        user.user_id = self._users.create_user(user)

        registered = self._with_roles(user)
        self._write_log(LogAction.REGISTER, registered, ip=ip)
        return registered
