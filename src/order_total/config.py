"""Process configuration, read once from the environment at startup."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

DEFAULT_TAX_RATE_SERVICE = "http://localhost:8001/find_rate"
DEFAULT_TAX_RATE_TIMEOUT = 5.0
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8002
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class ConfigError(ValueError):
    """Raised when an environment variable holds an unusable value."""


@dataclass(frozen=True)
class Settings:
    tax_rate_service_url: str = DEFAULT_TAX_RATE_SERVICE
    tax_rate_timeout: float = DEFAULT_TAX_RATE_TIMEOUT
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = "INFO"
    log_json: bool = False

    @staticmethod
    def from_env(environ: Mapping[str, str] | None = None) -> "Settings":
        env = os.environ if environ is None else environ
        return Settings(
            tax_rate_service_url=env.get(
                "SALES_TAX_RATE_SERVICE", DEFAULT_TAX_RATE_SERVICE
            ),
            tax_rate_timeout=_get_float(
                env, "SALES_TAX_RATE_TIMEOUT", DEFAULT_TAX_RATE_TIMEOUT
            ),
            host=env.get("ORDER_TOTAL_HOST", DEFAULT_HOST),
            port=_get_int(env, "ORDER_TOTAL_PORT", DEFAULT_PORT),
            log_level=_get_log_level(env, "LOG_LEVEL", "INFO"),
            log_json=_get_bool(env, "LOG_JSON", False),
        )


def _get_float(env: Mapping[str, str], key: str, default: float) -> float:
    raw = env.get(key)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ConfigError(f"{key} must be a number, got {raw!r}") from None
    if value <= 0:
        raise ConfigError(f"{key} must be > 0, got {raw!r}")
    return value


def _get_int(env: Mapping[str, str], key: str, default: int) -> int:
    raw = env.get(key)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"{key} must be an integer, got {raw!r}") from None
    if not 0 <= value <= 65535:
        raise ConfigError(f"{key} must be a valid port, got {raw!r}")
    return value


def _get_bool(env: Mapping[str, str], key: str, default: bool) -> bool:
    raw = env.get(key)
    if raw is None:
        return default
    return raw.strip().lower() in ("true", "1", "yes", "on")


def _get_log_level(env: Mapping[str, str], key: str, default: str) -> str:
    raw = env.get(key)
    if raw is None or not raw.strip():
        return default
    level = raw.strip().upper()
    if level not in LOG_LEVELS:
        raise ConfigError(f"{key} must be one of {', '.join(LOG_LEVELS)}, got {raw!r}")
    return level
