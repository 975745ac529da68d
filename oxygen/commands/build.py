"""Build command: cargo build with timing and binary size summary."""

import logging
from pathlib import Path
from typing import Any

from oxygen.commands.base import require_project
from oxygen.dependencies import Dependencies
from oxygen.ui import Report, Status
from oxygen.utils.format import format_bytes, format_duration
from oxygen.utils.project import package_name

logger = logging.getLogger(__name__)

TARGET_TRIPLES = ("x86_64-unknown-linux-gnu", "aarch64-unknown-linux-gnu")


def find_binary(deps: Dependencies, name: str, profile: str) -> dict[str, Any] | None:
    """Locate the built binary for a package.

    Looks in the host profile directory first, then in the cross-compile
    directories of the common Linux triples.

    Returns:
        Dict with 'path', 'size_bytes' and 'size_formatted', or None.
    """
    target_dir = Path(deps.config.build.target_dir or "target")
    candidates = [target_dir / profile / name]
    candidates.extend(target_dir / triple / profile / name for triple in TARGET_TRIPLES)

    for candidate in candidates:
        binary_path = candidate if candidate.is_absolute() else deps.cwd / candidate
        if not binary_path.is_file():
            continue
        try:
            size = binary_path.stat().st_size
        except OSError as e:
            logger.debug("Cannot stat %s: %s", binary_path, e)
            continue
        return {
            "path": str(candidate),
            "size_bytes": size,
            "size_formatted": format_bytes(size),
        }
    return None


async def run_build(deps: Dependencies) -> Report:
    """Build the project and summarize duration, binary and warnings.

    Returns:
        Report; not ok when the project is missing or cargo fails.

    Raises:
        ExecError: If cargo cannot be started.
    """
    precondition = require_project(deps)
    if precondition:
        return precondition

    release = deps.config.build.release_by_default
    args = ["build", "--release"] if release else ["build"]
    logger.info("Building Rust project (release=%s)", release)

    result = await deps.runner.run_timed("cargo", args)
    duration = format_duration(result.duration or 0.0)

    binary = None
    if result.succeeded:
        name = package_name(deps.cwd)
        if name:
            binary = find_binary(deps, name, "release" if release else "debug")

    report = Report(
        payload={
            "success": result.succeeded,
            "duration": duration,
            "binary": binary,
            "stdout": result.stdout,
            "stderr": result.stderr,
        },
        ok=result.succeeded,
    )

    if not result.succeeded:
        report.payload["error"] = "cargo build failed"
        report.status(Status.ERROR, f"Build failed after {duration}")
        if result.stderr:
            report.text(result.stderr)
        if result.stdout:
            report.text(result.stdout)
        return report

    report.status(Status.SUCCESS, f"Build completed successfully in {duration}")
    if binary:
        report.text(f"📦 Binary: {binary['path']} ({binary['size_formatted']})")

    # cargo writes progress to stderr, so this also shows "Compiling" lines
    if result.stderr and deps.config.build.show_warnings:
        report.text()
        report.status(Status.WARNING, "Warnings:")
        report.text(result.stderr)

    return report
