"""Command execution data models."""

import shlex
from dataclasses import dataclass, field


@dataclass(frozen=True)
class CommandResult:
    """Result of a local command execution.

    A non-zero exit code is not an error: it is reported through
    ``succeeded``. Only a failure to start the process raises.
    """

    command: str
    args: tuple[str, ...] = field(default_factory=tuple)
    returncode: int = 0
    stdout: str = ""
    stderr: str = ""
    duration: float | None = None

    @property
    def succeeded(self) -> bool:
        """True when the process exited with status zero."""
        return self.returncode == 0

    @property
    def command_line(self) -> str:
        """Program and arguments joined for display."""
        return shlex.join([self.command, *self.args])
