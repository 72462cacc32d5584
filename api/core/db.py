"""
Async database access helpers (raw SQL) using asyncpg.

This module owns the connection pool. Each service initializes it on startup
and closes it on shutdown (see `api/main.py`). Every helper borrows a pooled
connection for exactly one statement and hands it back on every exit path.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
"""

from __future__ import annotations

import logging
import os
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import asyncpg

from . import config

_pool: asyncpg.Pool | None = None

# Upper bound of a SERIAL primary key (PostgreSQL `integer`).
MAX_SERIAL_ID = 2_147_483_647

logger = logging.getLogger(__name__)


def _sanitize_database_url(url: str) -> str:
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def database_url() -> str | None:
    url = os.environ.get("DATABASE_URL", "").strip()
    if not url:
        return None
    return _sanitize_database_url(url)


def connect_kwargs() -> dict[str, Any]:
    """
    Connection settings for asyncpg.

    `DATABASE_URL` wins when set; otherwise the discrete DB_* variables apply.
    The transport security flag always comes from DB_SSL.
    """
    kwargs: dict[str, Any] = {"ssl": config.env_bool("DB_SSL", False)}
    url = database_url()
    if url:
        kwargs["dsn"] = url
        return kwargs

    kwargs.update(
        host=config.env_str("DB_HOST", "localhost"),
        port=config.env_int("DB_PORT", 5432),
        database=config.env_str("DB_NAME", "mydb"),
        user=config.env_str("DB_USER", "user"),
        password=os.environ.get("DB_PASSWORD", "password"),
    )
    return kwargs


async def init_pool() -> None:
    global _pool
    if _pool is not None:
        return None
    kwargs = connect_kwargs()
    _pool = await asyncpg.create_pool(
        min_size=config.env_int("DB_POOL_MIN_SIZE", 1),
        max_size=config.env_int("DB_POOL_MAX_SIZE", 5),
        command_timeout=config.env_float("DB_COMMAND_TIMEOUT", 30.0),
        **kwargs,
    )
    logger.info("db_pool_ready host=%s database=%s", kwargs.get("host", "dsn"), kwargs.get("database", "dsn"))


async def close_pool() -> None:
    global _pool
    if _pool is None:
        return None
    await _pool.close()
    _pool = None


def pool() -> asyncpg.Pool:
    if _pool is None:
        raise RuntimeError("DB pool is not initialized. Call init_pool() on startup.")
    return _pool


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)


async def fetch_one(sql: str, *args: Any) -> dict[str, Any] | None:
    """
    Run a query and return a single row as a dict (or None).
    """
    row = await pool().fetchrow(sql, *args)
    return _record_to_dict(row) if row is not None else None


async def fetch_all(sql: str, *args: Any) -> list[dict[str, Any]]:
    """
    Run a query and return all rows as a list of dicts.
    """
    rows = await pool().fetch(sql, *args)
    return [_record_to_dict(r) for r in rows]


async def execute(sql: str, *args: Any) -> None:
    """
    Run a statement (INSERT/UPDATE/DELETE/DDL). No result returned.
    """
    await pool().execute(sql, *args)
