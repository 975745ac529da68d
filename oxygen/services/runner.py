"""Local process execution.

Every external tool call goes through here. Processes run one at a time and
are awaited to completion; there is no timeout.
"""

import asyncio
import logging
import shlex
import time

from oxygen.exceptions import ExecError
from oxygen.models import CommandResult

logger = logging.getLogger(__name__)

MISSING_SUBCOMMAND_MARKERS = ("no such command", "no such subcommand")


def _decode(data: bytes | None) -> str:
    """Decode process output, replacing invalid UTF-8 sequences."""
    if not data:
        return ""
    return data.decode("utf-8", errors="replace")


async def run_command(
    command: str,
    args: list[str] | tuple[str, ...] = (),
    *,
    cwd: str | None = None,
) -> CommandResult:
    """Run a program and capture its output.

    Args:
        command: Program name or path, resolved on PATH.
        args: Argument vector, passed without a shell.
        cwd: Working directory for the child process.

    Returns:
        CommandResult with stdout, stderr, and return code.

    Raises:
        ExecError: If the process could not be started.
    """
    argv = [command, *args]
    command_line = shlex.join(argv)
    logger.info("Running command: %s", command_line)

    try:
        proc = await asyncio.create_subprocess_exec(
            *argv,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            cwd=cwd,
        )
    except OSError as e:
        logger.debug("Could not start %s: %s", command, e)
        raise ExecError(command_line, e) from e

    stdout, stderr = await proc.communicate()
    returncode = proc.returncode if proc.returncode is not None else 0

    logger.debug("Command %s exited with %d", command, returncode)

    return CommandResult(
        command=command,
        args=tuple(args),
        returncode=returncode,
        stdout=_decode(stdout),
        stderr=_decode(stderr),
    )


async def run_command_with_timing(
    command: str,
    args: list[str] | tuple[str, ...] = (),
    *,
    cwd: str | None = None,
) -> CommandResult:
    """Run a program and record wall-clock time until it exits.

    Returns:
        CommandResult whose ``duration`` is the elapsed time in seconds.

    Raises:
        ExecError: If the process could not be started.
    """
    start = time.perf_counter()
    result = await run_command(command, args, cwd=cwd)
    elapsed = time.perf_counter() - start

    return CommandResult(
        command=result.command,
        args=result.args,
        returncode=result.returncode,
        stdout=result.stdout,
        stderr=result.stderr,
        duration=elapsed,
    )


class ProcessRunner:
    """Default CommandRunner that spawns real processes."""

    def __init__(self, cwd: str | None = None) -> None:
        self.cwd = cwd

    async def run(
        self, command: str, args: list[str] | tuple[str, ...] = ()
    ) -> CommandResult:
        """Run a program in the runner's working directory."""
        return await run_command(command, args, cwd=self.cwd)

    async def run_timed(
        self, command: str, args: list[str] | tuple[str, ...] = ()
    ) -> CommandResult:
        """Run a program and record its elapsed time."""
        return await run_command_with_timing(command, args, cwd=self.cwd)


def is_missing_tool(outcome: CommandResult | ExecError) -> bool:
    """Check whether an outcome means the tool is not installed.

    A program that cannot be started is missing. Cargo itself reports an
    absent plugin (``cargo outdated`` without cargo-outdated) by exiting
    non-zero with "no such command" on stderr.
    """
    if isinstance(outcome, ExecError):
        return True
    if outcome.succeeded:
        return False
    stderr = outcome.stderr.lower()
    return any(marker in stderr for marker in MISSING_SUBCOMMAND_MARKERS)
