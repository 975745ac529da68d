"""Dependency injection container for Oxygen.

Every subcommand handler receives one of these instead of reaching for
global state.
"""

from dataclasses import dataclass, field
from pathlib import Path

from oxygen.config import Config, Settings
from oxygen.protocols import CommandRunner
from oxygen.services.runner import ProcessRunner


@dataclass
class Dependencies:
    """Container for Oxygen dependencies.

    Holds configuration, the command runner and the working directory.

    Example:
        deps = Dependencies.create()
        report = await run_doctor(deps)
    """

    config: Config
    runner: CommandRunner
    cwd: Path
    settings: Settings = field(default_factory=Settings)

    @classmethod
    def create(cls, cwd: Path | None = None) -> "Dependencies":
        """Create dependencies from the environment and config file.

        Returns:
            Initialized Dependencies instance

        Raises:
            ConfigError: If the config file is present but invalid.
        """
        settings = Settings.from_env()
        config = Config.load(settings.config_path)
        workdir = cwd or Path.cwd()
        return cls(
            config=config,
            runner=ProcessRunner(cwd=str(workdir)),
            cwd=workdir,
            settings=settings,
        )

    @classmethod
    def from_config(
        cls,
        config: Config,
        runner: CommandRunner | None = None,
        cwd: Path | None = None,
    ) -> "Dependencies":
        """Create dependencies with a custom configuration.

        Args:
            config: Custom Config instance
            runner: Runner to use (default: spawns real processes)
            cwd: Working directory (default: current directory)

        Returns:
            Dependencies with the given components
        """
        workdir = cwd or Path.cwd()
        return cls(
            config=config,
            runner=runner or ProcessRunner(cwd=str(workdir)),
            cwd=workdir,
        )
