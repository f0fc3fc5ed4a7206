from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def in_clause(values: Iterable[Any]) -> Tuple[str, Tuple[Any, ...]]:
    """Placeholders and params for ``col IN (...)``."""
    params = tuple(values)
    return ", ".join(["%s"] * len(params)), params


def parse_id_list(value: Optional[str]) -> Tuple[int, ...]:
    """Parse a comma separated id column such as ``'2,5,'``."""
    if not value:
        return ()
    return tuple(int(part) for part in str(value).split(",") if part.strip())


def format_id_list(ids: Iterable[int]) -> str:
    return ",".join(str(int(i)) for i in ids)


def as_datetime(value: Any) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))
