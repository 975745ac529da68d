"""Exceptions raised by Oxygen.

Only conditions that stop a subcommand are exceptions. Missing tools and
tools that exit non-zero are folded into normal results.
"""


class OxygenError(Exception):
    """Base class for hard errors surfaced at the CLI boundary."""


class ExecError(OxygenError):
    """An external program could not be started."""

    def __init__(self, command_line: str, reason: OSError | str) -> None:
        self.command_line = command_line
        self.reason = reason
        super().__init__(f"Failed to execute command: {command_line}: {reason}")


class ConfigError(OxygenError):
    """The configuration file exists but cannot be used."""


class ManifestError(OxygenError):
    """The project manifest cannot be read or parsed."""


class ScaffoldError(OxygenError):
    """A project template could not be materialized after its directory was created."""
