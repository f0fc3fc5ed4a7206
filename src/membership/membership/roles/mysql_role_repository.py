from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause
from .model import Role
from .repository import RoleRepository

_COLUMNS = "role_id, name, enabled, is_system, remark"


def _to_role(row: dict) -> Role:
    return Role(
        role_id=int(row["role_id"]),
        name=row["name"],
        enabled=bool(row.get("enabled", True)),
        is_system=bool(row.get("is_system", False)),
        remark=row.get("remark"),
    )


class MySQLRoleRepository(RoleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, role_id: int) -> Optional[Role]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM roles WHERE role_id=%s", (role_id,))
            row = fetchone(cur)
            return _to_role(row) if row else None

    def get_by_name(self, name: str) -> Optional[Role]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM roles WHERE name=%s", (name,))
            row = fetchone(cur)
            return _to_role(row) if row else None

    def list_by_ids(self, role_ids: Iterable[int]) -> Sequence[Role]:
        placeholders, params = in_clause(role_ids)
        if not params:
            return []
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM roles WHERE role_id IN ({placeholders}) ORDER BY role_id",
                params,
            )
            return [_to_role(r) for r in fetchall(cur)]
