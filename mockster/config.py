"""Runtime configuration for the mock server.

Settings are read from environment variables once and cached. Call
``get_settings.cache_clear()`` after changing the environment in tests.
"""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

logger = logging.getLogger(__name__)

# Per-series resolution limit enforced by the real backend
DEFAULT_MAX_POINTS = 11000

# Upper bound on series_count x points for a single query
DEFAULT_MAX_SAMPLES = 5_000_000


def _env_int(key: str, default: int) -> int:
    val = os.environ.get(key)
    if val is None or not val.strip():
        return default
    try:
        return int(val)
    except ValueError:
        logger.warning(f"Ignoring non-integer {key}={val!r}, using {default}")
        return default


def _env_bool(key: str, default: bool) -> bool:
    val = os.environ.get(key, "").strip().lower()
    if not val:
        return default
    return val in ("1", "true", "yes", "on")


def _normalize_prefix(prefix: str) -> str:
    prefix = prefix.strip().rstrip("/")
    if prefix and not prefix.startswith("/"):
        prefix = "/" + prefix
    return prefix


@dataclass(frozen=True)
class Settings:
    """Server settings."""

    host: str = "0.0.0.0"
    port: int = 8001
    log_level: str = "INFO"
    log_format: str = "TEXT"
    path_prefix: str = ""
    honor_latency: bool = True
    max_latency_ms: int = 30000
    max_points: int = DEFAULT_MAX_POINTS
    max_samples: int = DEFAULT_MAX_SAMPLES

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            host=os.environ.get("MOCKSTER_HOST", cls.host),
            port=_env_int("PORT", cls.port),
            log_level=os.environ.get("LOG_LEVEL", cls.log_level).upper(),
            log_format=os.environ.get("LOG_FORMAT", cls.log_format).upper(),
            path_prefix=_normalize_prefix(os.environ.get("MOCKSTER_PATH_PREFIX", "")),
            honor_latency=_env_bool("MOCKSTER_HONOR_LATENCY", cls.honor_latency),
            max_latency_ms=max(0, _env_int("MOCKSTER_MAX_LATENCY_MS", cls.max_latency_ms)),
            max_points=max(1, _env_int("MOCKSTER_MAX_POINTS", cls.max_points)),
            max_samples=max(1, _env_int("MOCKSTER_MAX_SAMPLES", cls.max_samples)),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings."""
    return Settings.from_env()
