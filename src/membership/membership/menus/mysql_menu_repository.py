from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Menu
from .repository import MenuRepository

_COLUMNS = "menu_id, name, display_name, url, parent_id, sort, visible"


def _to_menu(row: dict) -> Menu:
    return Menu(
        menu_id=int(row["menu_id"]),
        name=row["name"],
        display_name=row.get("display_name"),
        url=row.get("url"),
        parent_id=int(row.get("parent_id") or 0),
        sort=int(row.get("sort") or 0),
        visible=bool(row.get("visible", True)),
    )


class MySQLMenuRepository(MenuRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, menu_id: int) -> Optional[Menu]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM menus WHERE menu_id=%s", (menu_id,))
            row = fetchone(cur)
            return _to_menu(row) if row else None

    def list_children(self, parent_id: int = 0, *, visible_only: bool = True) -> Sequence[Menu]:
        sql = f"SELECT {_COLUMNS} FROM menus WHERE parent_id=%s"
        if visible_only:
            sql += " AND visible=1"
        sql += " ORDER BY sort DESC, menu_id"
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, (parent_id,))
            return [_to_menu(r) for r in fetchall(cur)]
