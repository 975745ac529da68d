"""Check command: format, lint and type-check in sequence."""

import logging
from typing import Any

from oxygen.commands.base import require_project, try_run
from oxygen.dependencies import Dependencies
from oxygen.exceptions import ExecError
from oxygen.ui import Report, Status
from oxygen.utils.format import format_duration

logger = logging.getLogger(__name__)

# (label, reported command, cargo args)
CHECK_STEPS: tuple[tuple[str, str, list[str]], ...] = (
    ("Format check", "cargo fmt --check", ["fmt", "--check"]),
    ("Clippy", "cargo clippy", ["clippy", "--", "-D", "warnings"]),
    ("Check", "cargo check", ["check"]),
)


async def run_check(deps: Dependencies) -> Report:
    """Run cargo fmt --check, cargo clippy and cargo check.

    Every step runs even when an earlier one fails, so the report always
    covers all three.
    """
    precondition = require_project(deps)
    if precondition:
        return precondition

    logger.info("Running Rust project checks")

    results: list[dict[str, Any]] = []
    report = Report()
    all_passed = True

    for label, command_line, args in CHECK_STEPS:
        logger.info("Running %s", command_line)
        outcome = await try_run(deps, "cargo", args, timed=True)

        if isinstance(outcome, ExecError):
            all_passed = False
            results.append({"command": command_line, "success": False, "error": str(outcome)})
            report.status(Status.ERROR, f"Failed to run {command_line}: {outcome}")
            continue

        duration = format_duration(outcome.duration or 0.0)
        all_passed &= outcome.succeeded
        results.append(
            {
                "command": command_line,
                "success": outcome.succeeded,
                "duration": duration,
                "stdout": outcome.stdout,
                "stderr": outcome.stderr,
            }
        )

        if outcome.succeeded:
            report.status(Status.SUCCESS, f"{label} passed ({duration})")
        else:
            report.status(Status.ERROR, f"{label} failed ({duration})")
            # diagnostics go to stderr; fmt prints its diff on stdout
            for stream in (outcome.stderr, outcome.stdout):
                if stream.strip():
                    report.text(stream.rstrip())

    report.text()
    if all_passed:
        report.text("🎉 All checks passed!")
    else:
        report.text("💥 Some checks failed!")
        report.fail("Some checks failed")

    report.payload["success"] = all_passed
    report.payload["results"] = results
    return report
