"""Schema setup for a fresh MySQL server (used by scripts/init_db.py and AUTO_INIT_DB)."""

from __future__ import annotations

import logging
import re
from contextlib import closing
from pathlib import Path
from typing import Iterator, Optional

import mysql.connector

from .connection import DBConfig

log = logging.getLogger(__name__)

_CREATE_DB_OR_USE = re.compile(r"(?im)^\s*(CREATE\s+DATABASE|USE)\b.*?;\s*$")


def _connect(config: DBConfig, *, with_database: bool = True):
    return mysql.connector.connect(use_pure=True, **config.connect_kwargs(with_database=with_database))


def split_statements(sql: str) -> Iterator[str]:
    """Yield the ``;``-terminated statements of ``sql``; quoted semicolons are kept."""
    start = 0
    quote: Optional[str] = None
    i = 0
    while i < len(sql):
        ch = sql[i]
        if ch == "\\" and quote:
            i += 2
            continue
        if ch in ("'", '"', "`"):
            quote = None if quote == ch else (quote or ch)
        elif ch == ";" and quote is None:
            stmt = sql[start:i].strip()
            if stmt:
                yield stmt
            start = i + 1
        i += 1

    tail = sql[start:].strip()
    if tail:
        yield tail


def ensure_database_exists(db_config: dict) -> None:
    config = DBConfig.from_dict(db_config)
    with closing(_connect(config, with_database=False)) as conn:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{config.database}` "
            "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    """Create the database and run every statement of schema.sql against it.

    ``CREATE DATABASE``/``USE`` lines in the file are ignored so the configured
    database name always wins. Statements use IF NOT EXISTS, so re-running is safe.
    """
    config = DBConfig.from_dict(db_config)
    ensure_database_exists(db_config)

    sql = _CREATE_DB_OR_USE.sub("", Path(schema_path).read_text(encoding="utf-8"))
    with closing(_connect(config)) as conn:
        cur = conn.cursor()
        count = 0
        for stmt in split_statements(sql):
            cur.execute(stmt)
            count += 1
        conn.commit()
    log.info("schema applied to %s@%s/%s (%d statements)", config.user, config.host, config.database, count)


def list_tables(db_config: dict) -> list[str]:
    with closing(_connect(DBConfig.from_dict(db_config))) as conn:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return sorted(row[0] for row in cur.fetchall())
