"""Protocol interfaces for dependency inversion.

Command handlers depend on ``CommandRunner`` rather than on
``ProcessRunner``, so tests can record calls or forbid spawning entirely.

Usage Example:

    from oxygen.protocols import CommandRunner

    async def rustc_version(runner: CommandRunner) -> str:
        result = await runner.run("rustc", ["--version"])
        return result.stdout.strip()

    class FakeRunner:
        async def run(self, command, args=()):
            return CommandResult(command=command, args=tuple(args), stdout="rustc 1.80.0")

        async def run_timed(self, command, args=()):
            return await self.run(command, args)

    await rustc_version(FakeRunner())
"""

from typing import Protocol, runtime_checkable

from oxygen.models import CommandResult


@runtime_checkable
class CommandRunner(Protocol):
    """Protocol for running external programs.

    Implementations return a CommandResult for every process that started,
    whatever its exit code, and raise ExecError when it could not start.
    """

    async def run(
        self, command: str, args: list[str] | tuple[str, ...] = ()
    ) -> CommandResult:
        """Run a program and capture its output."""
        ...

    async def run_timed(
        self, command: str, args: list[str] | tuple[str, ...] = ()
    ) -> CommandResult:
        """Run a program and record its wall-clock duration."""
        ...
