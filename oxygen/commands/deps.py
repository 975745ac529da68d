"""Deps command: dependency tree, updates, audit, licenses and sizes."""

import logging
from typing import Any

from oxygen.commands.base import error_text, require_project, try_run
from oxygen.dependencies import Dependencies
from oxygen.exceptions import ExecError
from oxygen.models import CommandResult, DepsAction
from oxygen.services.parsers import (
    parse_bloat_output,
    parse_dependency_tree,
    parse_json_or_raw,
    parse_license_tree,
)
from oxygen.services.runner import is_missing_tool
from oxygen.ui import Report, Status, failure

logger = logging.getLogger(__name__)

TREE_SUGGESTION = "Make sure you're in a Rust project with dependencies"


async def _run_plugin(
    deps: Dependencies, args: list[str], plugin: str
) -> CommandResult | Report:
    """Run a cargo plugin, turning an absent plugin into a soft result."""
    outcome = await try_run(deps, "cargo", args)
    if is_missing_tool(outcome):
        logger.info("%s is not installed", plugin)
        return failure(
            f"cargo {args[0]} not available",
            f"{plugin} not installed",
            suggestion=f"Install with: cargo install {plugin}",
        )
    assert isinstance(outcome, CommandResult)
    return outcome


async def _run_tree(deps: Dependencies, fmt: str, error: str) -> CommandResult | Report:
    outcome = await try_run(deps, "cargo", ["tree", "--format", fmt])
    if isinstance(outcome, ExecError) or not outcome.succeeded:
        logger.debug("cargo tree failed: %s", error_text(outcome))
        report = failure(error, suggestion=TREE_SUGGESTION)
        report.payload["details"] = error_text(outcome)
        return report
    return outcome


async def dependency_tree(deps: Dependencies) -> Report:
    """Show the dependency tree with enabled features."""
    logger.info("Showing dependency tree")
    outcome = await _run_tree(deps, "{p} {f}", "cargo tree command failed")
    if isinstance(outcome, Report):
        return outcome

    records = parse_dependency_tree(outcome.stdout)
    report = Report(
        payload={
            "success": True,
            "dependency_tree": [record.to_dict() for record in records],
            "raw_output": outcome.stdout.strip(),
        }
    )
    report.heading("📦 Dependency Tree")
    report.text(outcome.stdout.rstrip())
    return report


def _outdated_lines(data: Any) -> list[str]:
    dependencies = data.get("dependencies") if isinstance(data, dict) else None
    if not isinstance(dependencies, list):
        return []
    lines = []
    for dep in dependencies:
        fields = [dep.get(key) for key in ("name", "project", "compat", "latest")]
        if all(isinstance(value, str) for value in fields):
            name, project, compat, latest = fields
            lines.append(f"  {name} {project} → {compat} (latest: {latest})")
    return lines


async def outdated(deps: Dependencies) -> Report:
    """List dependencies with newer releases via cargo-outdated."""
    logger.info("Checking for outdated dependencies")
    outcome = await _run_plugin(deps, ["outdated", "--format", "json"], "cargo-outdated")
    if isinstance(outcome, Report):
        return outcome
    if not outcome.succeeded:
        return failure(error_text(outcome), "cargo outdated failed")

    parsed = parse_json_or_raw(outcome.stdout)
    report = Report(payload={"success": True, **parsed})
    report.heading("📊 Outdated Dependencies")

    if "raw_output" in parsed:
        report.text(parsed["raw_output"])
        return report

    lines = _outdated_lines(parsed["data"])
    if not lines:
        report.status(Status.SUCCESS, "All dependencies are up to date!")
    for line in lines:
        report.text(line)
    return report


def _vulnerabilities(data: Any) -> list[dict[str, Any]]:
    """Pull the advisory list out of cargo-audit's JSON report."""
    if not isinstance(data, dict):
        return []
    found = data.get("vulnerabilities")
    # cargo-audit nests the list; older releases emitted it directly
    if isinstance(found, dict):
        found = found.get("list")
    if not isinstance(found, list):
        return []
    return [entry for entry in found if isinstance(entry, dict)]


async def audit(deps: Dependencies) -> Report:
    """Check dependencies against the RustSec advisory database.

    The report is not ok when vulnerabilities are found, matching the
    exit status of cargo-audit itself.
    """
    logger.info("Auditing dependencies for security issues")
    outcome = await _run_plugin(deps, ["audit", "--json"], "cargo-audit")
    if isinstance(outcome, Report):
        return outcome

    parsed = parse_json_or_raw(outcome.stdout)
    if "raw_output" in parsed and not outcome.succeeded:
        return failure(error_text(outcome), "cargo audit failed")

    report = Report(payload={"success": True, **parsed})
    report.heading("🔒 Security Audit")

    if "raw_output" in parsed:
        report.text(parsed["raw_output"])
        return report

    vulnerabilities = _vulnerabilities(parsed["data"])
    if not vulnerabilities:
        report.status(Status.SUCCESS, "No known security vulnerabilities found!")
        return report

    report.status(Status.WARNING, f"Found {len(vulnerabilities)} vulnerability(ies):")
    for vuln in vulnerabilities:
        package = (vuln.get("package") or {}).get("name", "unknown")
        advisory = vuln.get("advisory") or {}
        title = advisory.get("title", "Unknown")
        severity = advisory.get("severity") or advisory.get("id") or "Unknown"
        report.text(f"  {package} - {title} ({severity})")
    report.fail(f"Found {len(vulnerabilities)} vulnerabilities")
    return report


async def licenses(deps: Dependencies) -> Report:
    """Tally the licenses of all dependencies."""
    logger.info("Analyzing dependency licenses")
    outcome = await _run_tree(deps, "{p} {l}", "Failed to get license information")
    if isinstance(outcome, Report):
        return outcome

    summary = parse_license_tree(outcome.stdout)
    report = Report(
        payload={
            "success": True,
            "dependencies": [record.to_dict() for record in summary.dependencies],
            "license_summary": summary.counts,
        }
    )
    report.heading("📜 Dependency Licenses")

    if not summary.counts:
        report.text("No license information found")
        return report

    report.text("License Summary:")
    for license_name, count in summary.counts.items():
        report.text(f"  {license_name} - {count} dependencies")
    report.text()
    report.text("Individual Dependencies:")
    for record in summary.dependencies:
        report.text(f"  {record.name} - {record.license}")
    return report


async def sizes(deps: Dependencies) -> Report:
    """Show which crates contribute most to the release binary."""
    logger.info("Analyzing dependency sizes")
    outcome = await _run_plugin(deps, ["bloat", "--release", "--crates"], "cargo-bloat")
    if isinstance(outcome, Report):
        outcome.text("   This tool helps identify which dependencies contribute most to binary size")
        return outcome
    if not outcome.succeeded:
        report = failure("cargo bloat failed")
        report.text(error_text(outcome))
        return report

    entries = parse_bloat_output(outcome.stdout)
    report = Report(
        payload={
            "success": True,
            "size_analysis": [entry.to_dict() for entry in entries],
            "raw_output": outcome.stdout.strip(),
        }
    )
    report.heading("📊 Dependency Size Analysis")
    report.text(outcome.stdout.rstrip())
    return report


HANDLERS = {
    DepsAction.TREE: dependency_tree,
    DepsAction.OUTDATED: outdated,
    DepsAction.AUDIT: audit,
    DepsAction.LICENSES: licenses,
    DepsAction.SIZE: sizes,
}


async def run_deps(deps: Dependencies, action: DepsAction) -> Report:
    """Run a dependency analysis action in the current project."""
    precondition = require_project(deps)
    if precondition:
        return precondition
    return await HANDLERS[action](deps)
