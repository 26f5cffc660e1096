"""
Async read-only database access (raw SQL) using asyncpg.

This module owns the connection pool. FastAPI initializes it on startup and
closes it on shutdown (see `api/main.py`).

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
"""

from __future__ import annotations

import logging
import os
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import asyncpg

from . import settings

logger = logging.getLogger(__name__)

_pool: asyncpg.Pool | None = None


def _sanitize_database_url(url: str) -> str:
    # asyncpg rejects libpq's `sslmode` query parameter.
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    return urlunsplit((parts.scheme, parts.netloc, parts.path, urlencode(params), parts.fragment))


def database_url() -> str:
    url = os.environ.get("DATABASE_URL", "").strip()
    if not url:
        raise RuntimeError("DATABASE_URL is not set.")
    return _sanitize_database_url(url)


async def init_pool() -> None:
    global _pool
    if _pool is not None:
        return None
    _pool = await asyncpg.create_pool(
        dsn=database_url(),
        min_size=settings.db_pool_min_size(),
        max_size=settings.db_pool_max_size(),
        command_timeout=settings.db_command_timeout(),
    )
    logger.info(
        "db_pool_ready min_size=%s max_size=%s",
        settings.db_pool_min_size(),
        settings.db_pool_max_size(),
    )


async def close_pool() -> None:
    global _pool
    if _pool is None:
        return None
    await _pool.close()
    _pool = None
    logger.info("db_pool_closed")


def pool() -> asyncpg.Pool:
    if _pool is None:
        raise RuntimeError("DB pool is not initialized. Call init_pool() on startup.")
    return _pool


async def fetch_one(sql: str, *args: Any) -> dict[str, Any] | None:
    """
    Run a query and return a single row as a dict (or None).
    """
    row = await pool().fetchrow(sql, *args)
    return dict(row) if row is not None else None


async def fetch_all(sql: str, *args: Any) -> list[dict[str, Any]]:
    """
    Run a query and return all rows as a list of dicts.
    """
    rows = await pool().fetch(sql, *args)
    return [dict(r) for r in rows]


async def fetch_count(sql: str, *args: Any) -> int:
    """
    Run a `SELECT count(*) AS total ...` query and return the number.
    """
    row = await fetch_one(sql, *args)
    if row is None:
        return 0
    return int(row["total"] or 0)
