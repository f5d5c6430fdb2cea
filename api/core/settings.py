"""
Process configuration read from environment variables.

Settings are loaded once at startup (see `api/main.py`). A missing
DATABASE_URL fails fast here instead of surfacing as per-request errors.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

DEFAULT_PORT = 5000
DEFAULT_POOL_MIN_SIZE = 1
DEFAULT_POOL_MAX_SIZE = 5
DEFAULT_COMMAND_TIMEOUT = 30


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name, "").strip().lower()
    if not raw:
        return default
    return raw in {"1", "true", "yes", "on"}


def _env_list(name: str) -> tuple[str, ...]:
    raw = os.environ.get(name, "")
    return tuple(item.strip() for item in raw.split(",") if item.strip())


def _sanitize_database_url(url: str) -> str:
    # asyncpg rejects libpq-only query params such as sslmode.
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def database_url() -> str:
    url = os.environ.get("DATABASE_URL", "").strip()
    if not url:
        raise RuntimeError("DATABASE_URL is not set.")
    return _sanitize_database_url(url)


@dataclass(frozen=True)
class Settings:
    database_url: str
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    pool_min_size: int = DEFAULT_POOL_MIN_SIZE
    pool_max_size: int = DEFAULT_POOL_MAX_SIZE
    command_timeout: int = DEFAULT_COMMAND_TIMEOUT
    bootstrap_schema: bool = True
    log_level: str = "INFO"
    cors_origins: tuple[str, ...] = ()


def load_settings() -> Settings:
    pool_min_size = max(_env_int("DB_POOL_MIN_SIZE", DEFAULT_POOL_MIN_SIZE), 0)
    pool_max_size = max(_env_int("DB_POOL_MAX_SIZE", DEFAULT_POOL_MAX_SIZE), 1)
    return Settings(
        database_url=database_url(),
        host=os.environ.get("HOST", "0.0.0.0").strip() or "0.0.0.0",
        port=_env_int("PORT", DEFAULT_PORT),
        pool_min_size=min(pool_min_size, pool_max_size),
        pool_max_size=pool_max_size,
        command_timeout=_env_int("DB_COMMAND_TIMEOUT", DEFAULT_COMMAND_TIMEOUT),
        bootstrap_schema=_env_bool("DB_BOOTSTRAP_SCHEMA", True),
        log_level=os.environ.get("LOG_LEVEL", "INFO").strip().upper() or "INFO",
        cors_origins=cors_origins(),
    )


def cors_origins() -> tuple[str, ...]:
    return _env_list("CORS_ORIGINS")
