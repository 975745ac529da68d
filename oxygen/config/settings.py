"""OXY_* environment variables.

``OXY_LOG_LEVEL`` and ``OXY_LOG_COLORS`` control stderr logging;
``OXY_CONFIG`` points at a config file other than the per-user default.
"""

import logging
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
DEFAULT_LOG_LEVEL = "WARNING"
TRUTHY = frozenset({"1", "true", "yes", "on"})


def env_flag(name: str, default: bool) -> bool:
    """Read a yes/no variable; anything outside TRUTHY counts as no."""
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in TRUTHY


def env_log_level(name: str = "OXY_LOG_LEVEL") -> str:
    """Read a log level name, falling back to WARNING when unknown."""
    raw = os.getenv(name, "").strip().upper()
    if raw in LOG_LEVELS:
        return raw
    if raw:
        logger.warning("Invalid %s %s, using %s", name, raw, DEFAULT_LOG_LEVEL)
    return DEFAULT_LOG_LEVEL


@dataclass
class Settings:
    """Process-wide options that come from the environment, not the config file."""

    log_level: str = DEFAULT_LOG_LEVEL
    log_colors: bool = True
    config_path: str | None = None

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the current environment."""
        return cls(
            log_level=env_log_level(),
            log_colors=env_flag("OXY_LOG_COLORS", True),
            config_path=os.getenv("OXY_CONFIG") or None,
        )
