from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable

from .connection import DBConfig, DatabaseConnection
from .mysql_base import db_cursor

# Tables created by database/schema.sql
POINTAGE_TABLES = ("submitters", "clock_entries", "rotation_records", "employee_events")

_CREATE_DB_RE = re.compile(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$")
_USE_RE = re.compile(r"(?im)^\s*USE\b.*?;\s*$")


def _strip_create_db_and_use(sql: str) -> str:
    # The target database comes from DB_CONFIG, not from the file.
    return _USE_RE.sub("", _CREATE_DB_RE.sub("", sql))


def iter_sql_statements(sql: str) -> Iterable[str]:
    """Split a .sql file on ``;`` outside quotes, dropping ``--`` comments."""
    buf: list[str] = []
    quote = None
    i = 0

    while i < len(sql):
        ch = sql[i]

        if quote:
            buf.append(ch)
            if ch == "\\" and quote != "`" and i + 1 < len(sql):
                buf.append(sql[i + 1])
                i += 2
                continue
            if ch == quote:
                quote = None
        elif ch in ("'", '"', "`"):
            quote = ch
            buf.append(ch)
        elif ch == "-" and sql.startswith("--", i):
            end = sql.find("\n", i)
            i = len(sql) if end == -1 else end
            continue
        elif ch == ";":
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
        else:
            buf.append(ch)
        i += 1

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _run_sql_file(db_config: dict, path: str | Path) -> int:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))
    statements = list(iter_sql_statements(_strip_create_db_and_use(Path(path).read_text(encoding="utf-8"))))
    with db_cursor(conn, dictionary=False) as (_, cur):
        for stmt in statements:
            cur.execute(stmt)
    return len(statements)


def ensure_database_exists(db_config: dict) -> None:
    config = DBConfig.from_dict(db_config)
    raw = DatabaseConnection(config).connect(with_database=False)
    try:
        cur = raw.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{config.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        raw.commit()
    finally:
        raw.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> int:
    """Create the database if needed, then run every statement of ``schema_path``."""
    ensure_database_exists(db_config)
    return _run_sql_file(db_config, schema_path)


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> int:
    return _run_sql_file(db_config, seed_path)


def list_tables(db_config: dict) -> list[str]:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))
    with db_cursor(conn, dictionary=False) as (_, cur):
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]


def missing_tables(existing: Iterable[str]) -> list[str]:
    present = {t.lower() for t in existing}
    return [t for t in POINTAGE_TABLES if t not in present]
