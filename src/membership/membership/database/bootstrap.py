from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable

import mysql.connector

from ..common.security import md5_hex
from ..core.constants import DEFAULT_ADMIN_ROLE_NAME
from .connection import DBConfig


def _connect(target: DBConfig, *, with_database: bool = True):
    kwargs = dict(
        host=target.host,
        port=target.port,
        user=target.user,
        password=target.password,
        use_pure=True,
    )
    if with_database:
        kwargs["database"] = target.database
    return mysql.connector.connect(**kwargs)


def _strip_create_db_and_use(sql: str) -> str:
    # schema.sql must work whatever the configured database is called.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def iter_sql_statements(sql: str) -> Iterable[str]:
    """Split a script on ``;`` outside of quoted strings."""
    buf: list[str] = []
    quote = ""
    escape = False

    for ch in sql:
        buf.append(ch)
        if escape:
            escape = False
        elif ch == "\\":
            escape = True
        elif quote:
            if ch == quote:
                quote = ""
        elif ch in ("'", '"'):
            quote = ch
        elif ch == ";":
            buf.pop()
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt

    tail = "".join(buf).strip()
    if tail:
        yield tail


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_mapping(db_config)
    conn = _connect(target, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    sql = _strip_create_db_and_use(Path(schema_path).read_text(encoding="utf-8"))

    conn = _connect(DBConfig.from_mapping(db_config))
    try:
        cur = conn.cursor()
        for stmt in iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()


def ensure_admin_user(
    db_config: dict,
    *,
    name: str = "admin",
    password: str = "admin",
    role_name: str = DEFAULT_ADMIN_ROLE_NAME,
) -> int:
    """Make sure the administrator role and account exist; returns the user id.

    An existing account keeps its password, it is only re-enabled.
    """
    conn = _connect(DBConfig.from_mapping(db_config))
    try:
        cur = conn.cursor(dictionary=True)

        cur.execute("SELECT role_id FROM roles WHERE name=%s", (role_name,))
        row = cur.fetchone()
        if row:
            role_id = int(row["role_id"])
        else:
            cur.execute(
                "INSERT INTO roles(name, enabled, is_system, remark) VALUES(%s, 1, 1, %s)",
                (role_name, "Built-in administrators"),
            )
            role_id = int(cur.lastrowid)

        cur.execute("SELECT user_id FROM users WHERE name=%s", (name,))
        row = cur.fetchone()
        if row:
            user_id = int(row["user_id"])
            cur.execute("UPDATE users SET enabled=1, role_id=%s WHERE user_id=%s", (role_id, user_id))
        else:
            cur.execute(
                """
                INSERT INTO users(name, password, display_name, role_id, enabled, registered_at)
                VALUES(%s, %s, %s, %s, 1, NOW())
                """,
                (name, md5_hex(password), name, role_id),
            )
            user_id = int(cur.lastrowid)

        conn.commit()
        return user_id
    finally:
        conn.close()


def list_tables(db_config: dict) -> list[str]:
    conn = _connect(DBConfig.from_mapping(db_config))
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
