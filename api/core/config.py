"""
Environment-driven settings helpers.

Every helper falls back to its default when the variable is unset, blank or
unparsable, so a typo in the environment never takes the process down.
"""

from __future__ import annotations

import os

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def env_str(name: str, default: str) -> str:
    return os.environ.get(name, default).strip() or default


def env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name, "").strip().lower()
    if raw in _TRUE_VALUES:
        return True
    if raw in _FALSE_VALUES:
        return False
    return default


def log_level() -> str:
    return env_str("LOG_LEVEL", "INFO").upper()


def auto_create_schema() -> bool:
    return env_bool("DB_AUTO_CREATE_SCHEMA", True)


def password_hash_scheme() -> str:
    return env_str("PASSWORD_HASH_SCHEME", "sha512").lower()


def freetogame_base_url() -> str:
    return env_str("FREETOGAME_BASE_URL", "https://www.freetogame.com/api")


def catalog_ttl_s() -> float:
    return env_float("CATALOG_TTL_S", 3600.0)


def catalog_timeout_s() -> float:
    return env_float("CATALOG_TIMEOUT_S", 30.0)
