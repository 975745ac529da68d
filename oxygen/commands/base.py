"""Helpers shared by the subcommand handlers."""

import logging

from oxygen.dependencies import Dependencies
from oxygen.exceptions import ExecError
from oxygen.models import CommandResult
from oxygen.ui import Report, failure
from oxygen.utils.project import is_git_repo, is_rust_project

logger = logging.getLogger(__name__)

NOT_A_PROJECT = "Not a Rust project (no Cargo.toml found)"
NOT_A_REPO = "Not in a git repository"


def require_project(deps: Dependencies, **fields: object) -> Report | None:
    """Return a failure report when the working directory has no manifest."""
    if is_rust_project(deps.cwd):
        return None
    logger.debug("No Cargo.toml in %s", deps.cwd)
    return failure(NOT_A_PROJECT, is_rust_project=False, **fields)


def require_repo(deps: Dependencies, action: str) -> Report | None:
    """Return a failure report when the working directory is not a git repo."""
    if is_git_repo(deps.cwd):
        return None
    return failure(NOT_A_REPO, action=action)


async def try_run(
    deps: Dependencies,
    command: str,
    args: list[str],
    timed: bool = False,
) -> CommandResult | ExecError:
    """Run a command, returning a spawn failure instead of raising it.

    For flows that report every step even when a tool is absent.
    """
    try:
        if timed:
            return await deps.runner.run_timed(command, args)
        return await deps.runner.run(command, args)
    except ExecError as e:
        logger.debug("Tool unavailable: %s", e)
        return e


def succeeded(outcome: CommandResult | ExecError) -> bool:
    """True when the process started and exited zero."""
    return isinstance(outcome, CommandResult) and outcome.succeeded


def error_text(outcome: CommandResult | ExecError) -> str:
    """Best description of why a command failed."""
    if isinstance(outcome, ExecError):
        return str(outcome)
    text = outcome.stderr.strip() or outcome.stdout.strip()
    return text or f"{outcome.command_line} exited with status {outcome.returncode}"
