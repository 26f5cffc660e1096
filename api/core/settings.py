"""
Runtime settings read from the environment.

Every value is read on call, so tests can monkeypatch the environment
without reloading modules.
"""

from __future__ import annotations

import os


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.environ.get(name, "").strip().lower()
    if not raw:
        return default
    return raw in {"1", "true", "yes", "on"}


def db_pool_min_size() -> int:
    return max(1, _env_int("DB_POOL_MIN_SIZE", 1))


def db_pool_max_size() -> int:
    return max(db_pool_min_size(), _env_int("DB_POOL_MAX_SIZE", 5))


def db_command_timeout() -> int:
    return _env_int("DB_COMMAND_TIMEOUT", 30)


def max_page_limit() -> int:
    return max(1, _env_int("MAX_PAGE_LIMIT", 100))


def default_page_limit() -> int:
    return min(max(1, _env_int("DEFAULT_PAGE_LIMIT", 10)), max_page_limit())


def default_lookback_days() -> int:
    return max(0, _env_int("DEFAULT_LOOKBACK_DAYS", 30))


def expose_error_details() -> bool:
    # Off by default: storage errors can carry table/column names.
    return _env_bool("EXPOSE_ERROR_DETAILS", False)


def cors_origins() -> list[str]:
    raw = os.environ.get("CORS_ORIGINS", "").strip()
    if not raw:
        return ["http://localhost:3000", "http://127.0.0.1:3000"]
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def log_level() -> str:
    return os.environ.get("LOG_LEVEL", "INFO").strip().upper() or "INFO"
