from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_datetime, db_cursor, fetchone, format_id_list, parse_id_list
from .model import User
from .repository import UserRepository

_COLUMNS = (
    "user_id, name, password, display_name, role_id, role_ids, enabled, online, "
    "logins, last_login, last_login_ip, registered_at"
)


def _to_user(row: dict) -> User:
    return User(
        user_id=int(row["user_id"]),
        name=row["name"],
        password=row["password"],
        display_name=row.get("display_name") or "",
        role_id=int(row.get("role_id") or 0),
        role_ids=parse_id_list(row.get("role_ids")),
        enabled=bool(row.get("enabled", True)),
        online=bool(row.get("online", False)),
        logins=int(row.get("logins") or 0),
        last_login=as_datetime(row.get("last_login")),
        last_login_ip=row.get("last_login_ip"),
        registered_at=as_datetime(row.get("registered_at")),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE user_id=%s", (user_id,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_by_name(self, name: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE name=%s", (name,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def create_user(self, user: User) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(name, password, display_name, role_id, role_ids, enabled, registered_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    user.name,
                    user.password,
                    user.display_name or user.name,
                    int(user.role_id),
                    format_id_list(user.role_ids),
                    1 if user.enabled else 0,
                    user.registered_at,
                ),
            )
            return int(cur.lastrowid)

    def save(self, user: User) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE users
                SET password=%s, display_name=%s, role_id=%s, role_ids=%s, enabled=%s, online=%s,
                    logins=%s, last_login=%s, last_login_ip=%s
                WHERE user_id=%s
                """,
                (
                    user.password,
                    user.display_name,
                    int(user.role_id),
                    format_id_list(user.role_ids),
                    1 if user.enabled else 0,
                    1 if user.online else 0,
                    int(user.logins),
                    user.last_login,
                    user.last_login_ip,
                    int(user.user_id),
                ),
            )
            return cur.rowcount > 0
