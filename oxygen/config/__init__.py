"""Configuration module for Oxygen.

- Config: TOML config file (tools, build, output sections)
- Settings: Environment variable configuration
"""

from oxygen.config.main import (
    BuildConfig,
    Config,
    OutputConfig,
    ToolsConfig,
    default_config_path,
)
from oxygen.config.settings import Settings

__all__ = [
    "BuildConfig",
    "Config",
    "OutputConfig",
    "Settings",
    "ToolsConfig",
    "default_config_path",
]
