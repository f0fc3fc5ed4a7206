from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_datetime, db_cursor, fetchall
from .model import LogEntry
from .repository import LogRepository


class MySQLLogRepository(LogRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create_log(
        self,
        *,
        category: str,
        action: str,
        subject: Optional[str],
        subject_id: int,
        detail: Optional[str],
        ip: Optional[str],
        created_at: datetime,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO logs(category, action, subject, subject_id, detail, ip, created_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (category, action, subject, int(subject_id), detail, ip, created_at),
            )
            return int(cur.lastrowid)

    def list_recent(self, *, category: Optional[str] = None, limit: int = 50) -> Sequence[LogEntry]:
        sql = "SELECT log_id, category, action, subject, subject_id, detail, ip, created_at FROM logs"
        params: list = []
        if category:
            sql += " WHERE category=%s"
            params.append(category)
        sql += " ORDER BY log_id DESC LIMIT %s"
        params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [
                LogEntry(
                    log_id=int(r["log_id"]),
                    category=r["category"],
                    action=r["action"],
                    subject=r.get("subject"),
                    subject_id=int(r.get("subject_id") or 0),
                    detail=r.get("detail"),
                    ip=r.get("ip"),
                    created_at=as_datetime(r["created_at"]),
                )
                for r in fetchall(cur)
            ]
