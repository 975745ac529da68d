"""Doctor command: environment diagnostics."""

import logging
import os

from oxygen.commands.base import succeeded, try_run
from oxygen.dependencies import Dependencies
from oxygen.models import CheckStatus, CommandResult, DiagnosticCheck
from oxygen.services.diagnostics import aggregate_health, overall_status
from oxygen.services.parsers import first_line, parse_rustup_show
from oxygen.ui import Report, icon
from oxygen.utils.project import is_rust_project

logger = logging.getLogger(__name__)

# (check name, tool name, argv, required)
VERSION_CHECKS = (
    ("Rust Compiler", "rustc", ["rustc", "--version"], True),
    ("Cargo", "cargo", ["cargo", "--version"], True),
)

COMPANION_TOOLS = (
    ("clippy", ["cargo", "clippy", "--version"]),
    ("rustfmt", ["cargo", "fmt", "--version"]),
)

# (variable, required)
ENV_VARS = (
    ("CARGO_HOME", False),
    ("RUSTUP_HOME", False),
    ("PATH", True),
)

SUGGESTIONS = (
    "Install missing tools with: rustup component add clippy rustfmt",
    "Ensure Rust toolchain is properly installed via rustup.rs",
    "Check that ~/.cargo/bin is in your PATH",
)


async def _check_version(
    deps: Dependencies, name: str, tool: str, argv: list[str], required: bool
) -> DiagnosticCheck:
    outcome = await try_run(deps, argv[0], argv[1:])
    if succeeded(outcome):
        assert isinstance(outcome, CommandResult)
        return DiagnosticCheck(
            name=name,
            status=CheckStatus.OK,
            message=f"{tool} is available",
            value=outcome.stdout.strip(),
            required=required,
        )
    return DiagnosticCheck(
        name=name,
        status=CheckStatus.ERROR if required else CheckStatus.WARNING,
        message=f"{tool} not found in PATH" if required else f"{tool} not available",
        required=required,
    )


async def _check_rustup(deps: Dependencies) -> DiagnosticCheck:
    outcome = await try_run(deps, "rustup", ["show"])
    if not succeeded(outcome):
        return DiagnosticCheck(
            name="Rustup",
            status=CheckStatus.WARNING,
            message="rustup not found - toolchain management unavailable",
        )
    assert isinstance(outcome, CommandResult)
    active, _ = parse_rustup_show(outcome.stdout)
    return DiagnosticCheck(
        name="Rustup",
        status=CheckStatus.OK,
        message="rustup is available",
        value=active or "unknown",
    )


def _check_env_var(var: str, required: bool) -> DiagnosticCheck:
    name = f"Environment: {var}"
    value = os.environ.get(var)
    if value is None:
        return DiagnosticCheck(
            name=name,
            status=CheckStatus.ERROR if required else CheckStatus.WARNING,
            message=f"{var} is not set",
            required=required,
        )
    if var == "PATH" and "cargo" not in value:
        # set but without cargo is advisory
        return DiagnosticCheck(
            name=name,
            status=CheckStatus.WARNING,
            message=f"{var} is set but does not include cargo",
            value=value,
        )
    return DiagnosticCheck(
        name=name,
        status=CheckStatus.OK,
        message=f"{var} is set",
        value=value,
        required=required,
    )


async def collect_checks(deps: Dependencies) -> list[DiagnosticCheck]:
    """Run every diagnostic check in a fixed order.

    No check depends on the outcome of another.
    """
    checks = []
    for name, tool, argv, required in VERSION_CHECKS:
        checks.append(await _check_version(deps, name, tool, argv, required))

    checks.append(await _check_rustup(deps))

    for tool, argv in COMPANION_TOOLS:
        check = await _check_version(deps, f"Tool: {tool}", tool, argv, False)
        if check.value:
            check.value = first_line(check.value)
        checks.append(check)

    for var, required in ENV_VARS:
        checks.append(_check_env_var(var, required))

    if is_rust_project(deps.cwd):
        checks.append(
            DiagnosticCheck(
                name="Current Directory",
                status=CheckStatus.OK,
                message="In a Rust project directory",
            )
        )
    else:
        checks.append(
            DiagnosticCheck(
                name="Current Directory",
                status=CheckStatus.INFO,
                message="Not in a Rust project directory",
            )
        )
    return checks


async def run_doctor(deps: Dependencies) -> Report:
    """Diagnose the Rust environment.

    Returns:
        Report that is ok when every required check passed.
    """
    logger.info("Running environment diagnostics")

    checks = await collect_checks(deps)
    healthy = aggregate_health(checks)

    report = Report(
        payload={
            "success": healthy,
            "overall_status": overall_status(checks),
            "checks": [check.to_dict() for check in checks],
        },
        ok=healthy,
    )

    if healthy:
        report.text("🩺 Environment Health: ✅ Healthy")
    else:
        report.text("🩺 Environment Health: ⚠️  Issues Found")
    report.text()

    for check in checks:
        if check.value:
            report.text(f"{icon(check.status)} {check.name}: {check.message} ({check.value})")
        else:
            report.text(f"{icon(check.status)} {check.name}: {check.message}")

    if not healthy:
        report.payload["error"] = "Environment issues found"
        report.text()
        report.text("💡 Suggestions:")
        for suggestion in SUGGESTIONS:
            report.text(f"   • {suggestion}")

    return report
