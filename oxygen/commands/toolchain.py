"""Toolchain command: rustup toolchain management."""

import logging

from oxygen.commands.base import error_text, try_run
from oxygen.dependencies import Dependencies
from oxygen.exceptions import ExecError
from oxygen.models import CommandResult, ToolchainAction
from oxygen.services.parsers import parse_toolchain_list
from oxygen.ui import Report, Status, failure

logger = logging.getLogger(__name__)

RUSTUP_MISSING = "rustup not found"
RUSTUP_SUGGESTION = "Install rustup from https://rustup.rs"

# action -> (payload action name, rustup args before the toolchain, verb)
MUTATIONS = {
    ToolchainAction.INSTALL: ("install", ["toolchain", "install"], "install"),
    ToolchainAction.DEFAULT: ("set_default", ["default"], "set default"),
    ToolchainAction.REMOVE: ("remove", ["toolchain", "uninstall"], "remove"),
}


async def _rustup(deps: Dependencies, args: list[str]) -> CommandResult | Report:
    """Run rustup, turning a missing binary into a soft result."""
    outcome = await try_run(deps, "rustup", args)
    if isinstance(outcome, ExecError):
        return failure(RUSTUP_MISSING, suggestion=RUSTUP_SUGGESTION)
    return outcome


async def list_toolchains(deps: Dependencies) -> Report:
    """List installed toolchains and the default one."""
    logger.info("Listing installed toolchains")
    outcome = await _rustup(deps, ["toolchain", "list"])
    if isinstance(outcome, Report):
        return outcome
    if not outcome.succeeded:
        return failure(error_text(outcome), "Failed to list toolchains")

    toolchains = parse_toolchain_list(outcome.stdout)
    default = next((tc.name for tc in toolchains if tc.is_default), None)

    report = Report(
        payload={
            "success": True,
            "toolchains": [tc.to_dict() for tc in toolchains],
            "default": default,
        }
    )
    report.heading("🔧 Installed Rust Toolchains")
    if not toolchains:
        report.text("No toolchains installed")
    for tc in toolchains:
        if tc.is_default:
            report.text(f"  {tc.name} (default) ✅")
        else:
            report.text(f"  {tc.name}")
    report.text()
    report.suggest("Use `oxy toolchain install <name>` to install new toolchains")
    report.text("   Use `oxy toolchain default <name>` to set default toolchain")
    return report


async def change_toolchain(
    deps: Dependencies, action: ToolchainAction, toolchain: str
) -> Report:
    """Install, remove or select a toolchain."""
    name, args, verb = MUTATIONS[action]
    logger.info("Toolchain %s: %s", name, toolchain)

    outcome = await _rustup(deps, [*args, toolchain])
    if isinstance(outcome, Report):
        outcome.payload.update(action=name, toolchain=toolchain, status="error")
        return outcome

    if not outcome.succeeded:
        report = Report(
            payload={
                "action": name,
                "toolchain": toolchain,
                "status": "error",
                "error": error_text(outcome),
            },
            ok=False,
        )
        report.status(Status.ERROR, f"Failed to {verb} toolchain: {toolchain}")
        report.text(f"Error: {error_text(outcome)}")
        return report

    report = Report(payload={"action": name, "toolchain": toolchain, "status": "success"})
    if action is ToolchainAction.INSTALL:
        output = outcome.stdout.strip()
        report.payload["output"] = output
        report.status(Status.SUCCESS, f"Successfully installed toolchain: {toolchain}")
        if output:
            report.text(f"Output: {output}")
    elif action is ToolchainAction.DEFAULT:
        report.status(Status.SUCCESS, f"Set default toolchain to: {toolchain}")
    else:
        report.status(Status.SUCCESS, f"Successfully removed toolchain: {toolchain}")
    return report


async def show_toolchain(deps: Dependencies) -> Report:
    """Show the active toolchain."""
    logger.info("Showing active toolchain")
    outcome = await _rustup(deps, ["show", "active-toolchain"])
    if isinstance(outcome, Report):
        return outcome
    if not outcome.succeeded:
        return failure(error_text(outcome), "Failed to show active toolchain")

    active = outcome.stdout.strip()
    report = Report(payload={"success": True, "active_toolchain": active})
    report.heading("🔧 Active Toolchain")
    report.text(f"  {active}")
    return report


async def run_toolchain(
    deps: Dependencies, action: ToolchainAction, toolchain: str | None = None
) -> Report:
    """Dispatch a toolchain action.

    Args:
        deps: Dependencies container.
        action: Which rustup operation to perform.
        toolchain: Toolchain name, required for install, default and remove.
    """
    if action is ToolchainAction.LIST:
        return await list_toolchains(deps)
    if action is ToolchainAction.SHOW:
        return await show_toolchain(deps)
    if not toolchain:
        return failure(f"A toolchain name is required for '{action.value}'")
    return await change_toolchain(deps, action, toolchain)
