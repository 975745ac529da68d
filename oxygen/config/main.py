"""User configuration file.

An optional TOML document, by default at ``~/.config/oxygen/config.toml``:

    [tools]
    custom_tools = ["cargo-nextest"]
    check_paths = ["/opt/rust/bin"]

    [build]
    release_by_default = true
    show_warnings = true
    target_dir = "build-out"

    [output]
    json_by_default = false
    color = true

A missing file, section or key means the default.
"""

import logging
import os
import tomllib
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

from oxygen.exceptions import ConfigError

logger = logging.getLogger(__name__)


@dataclass
class ToolsConfig:
    """Extra tools for the inventory and extra directories to search."""

    custom_tools: list[str] = field(default_factory=list)
    check_paths: list[str] = field(default_factory=list)


@dataclass
class BuildConfig:
    """Build command behaviour."""

    release_by_default: bool = True
    show_warnings: bool = True
    target_dir: str | None = None


@dataclass
class OutputConfig:
    """Output defaults."""

    json_by_default: bool = False
    color: bool = True


SECTION_TYPES: dict[str, dict[str, tuple[type, ...]]] = {
    "tools": {"custom_tools": (list,), "check_paths": (list,)},
    "build": {
        "release_by_default": (bool,),
        "show_warnings": (bool,),
        "target_dir": (str, type(None)),
    },
    "output": {"json_by_default": (bool,), "color": (bool,)},
}


def default_config_path() -> Path:
    """Return the per-user config file location.

    Honors ``XDG_CONFIG_HOME`` and falls back to ``~/.config``.
    """
    config_home = os.getenv("XDG_CONFIG_HOME")
    base = Path(config_home) if config_home else Path.home() / ".config"
    return base / "oxygen" / "config.toml"


@dataclass
class Config:
    """Application configuration.

    Aggregates the tools, build and output sections of the config file.
    """

    tools: ToolsConfig = field(default_factory=ToolsConfig)
    build: BuildConfig = field(default_factory=BuildConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    path: Path | None = None

    @classmethod
    def load(cls, path: Path | str | None = None) -> "Config":
        """Load configuration from a TOML file.

        Args:
            path: Config file path (default: per-user config directory)

        Returns:
            Config with file values over defaults; defaults if the file
            does not exist.

        Raises:
            ConfigError: If the file cannot be read, is not valid TOML, or
                a known key has the wrong type.
        """
        config_path = Path(path) if path else default_config_path()

        if not config_path.exists():
            logger.debug("Config file not found: %s, using defaults", config_path)
            return cls(path=None)

        try:
            with config_path.open("rb") as f:
                data = tomllib.load(f)
            logger.debug("Read config from %s", config_path)
        except OSError as e:
            raise ConfigError(f"Failed to read config file {config_path}: {e}") from e
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Failed to parse config file {config_path}: {e}") from e

        return cls.from_dict(data, path=config_path)

    @classmethod
    def from_dict(cls, data: dict[str, Any], path: Path | None = None) -> "Config":
        """Build a Config from parsed TOML data.

        Raises:
            ConfigError: If a known key has the wrong type.
        """
        sections = {
            "tools": ToolsConfig,
            "build": BuildConfig,
            "output": OutputConfig,
        }
        values: dict[str, Any] = {}

        for key in data:
            if key not in sections:
                logger.debug("Ignoring unknown config section: %s", key)

        for name, section_cls in sections.items():
            raw = data.get(name, {})
            if not isinstance(raw, dict):
                raise ConfigError(f"Config section [{name}] must be a table")
            values[name] = section_cls(**cls._section_values(name, raw, section_cls))

        return cls(path=path, **values)

    @staticmethod
    def _section_values(
        name: str, raw: dict[str, Any], section_cls: type
    ) -> dict[str, Any]:
        """Validate one section's keys against the dataclass fields."""
        known = {f.name for f in fields(section_cls)}
        result: dict[str, Any] = {}
        for key, value in raw.items():
            if key not in known:
                logger.debug("Ignoring unknown config key: %s.%s", name, key)
                continue
            expected = SECTION_TYPES[name][key]
            if not isinstance(value, expected):
                raise ConfigError(
                    f"Config key {name}.{key} has invalid type {type(value).__name__}"
                )
            if isinstance(value, list) and not all(isinstance(v, str) for v in value):
                raise ConfigError(f"Config key {name}.{key} must be a list of strings")
            result[key] = value
        return result
