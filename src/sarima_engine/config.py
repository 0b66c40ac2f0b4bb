from __future__ import annotations

"""Process settings loaded from environment variables.

``get_settings`` reads the environment once and caches the resulting
``Settings`` object.  Tests may call ``reset_settings_cache`` to force a
reload when they modify environment variables at runtime.
"""

from dataclasses import dataclass
import os
from functools import lru_cache


@dataclass
class Settings:
    log_level: str = "INFO"
    log_json: bool = False
    artifacts_dir: str | None = None


@lru_cache()
def get_settings() -> Settings:
    """Return settings loaded from environment variables."""

    log_level = os.getenv("SARIMA_LOG_LEVEL", "INFO")
    log_json = os.getenv("SARIMA_LOG_JSON", "false").lower() == "true"
    artifacts_dir = os.getenv("SARIMA_ARTIFACTS_DIR") or None
    return Settings(
        log_level=log_level,
        log_json=log_json,
        artifacts_dir=artifacts_dir,
    )


def reset_settings_cache() -> None:
    """Clear the settings cache (mainly for tests)."""

    get_settings.cache_clear()
