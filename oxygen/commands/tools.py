"""Tools command: inventory of Rust development tools."""

import logging
import os
import shutil

from oxygen.commands.base import succeeded, try_run
from oxygen.dependencies import Dependencies
from oxygen.models import CommandResult, ToolStatus
from oxygen.services.parsers import first_line
from oxygen.ui import Report, Status

logger = logging.getLogger(__name__)

# tool name -> probe argv
KNOWN_TOOLS: tuple[tuple[str, list[str]], ...] = (
    ("rustc", ["rustc", "--version"]),
    ("cargo", ["cargo", "--version"]),
    ("rustfmt", ["rustfmt", "--version"]),
    ("clippy", ["cargo", "clippy", "--version"]),
    ("rustup", ["rustup", "--version"]),
    ("cargo-watch", ["cargo", "watch", "--version"]),
    ("cargo-edit", ["cargo", "add", "--version"]),
    ("cargo-audit", ["cargo", "audit", "--version"]),
    ("cargo-outdated", ["cargo", "outdated", "--version"]),
    ("cargo-tree", ["cargo", "tree", "--version"]),
    ("cargo-expand", ["cargo", "expand", "--version"]),
    ("cargo-flamegraph", ["cargo", "flamegraph", "--version"]),
    ("cargo-criterion", ["cargo", "criterion", "--version"]),
    ("rust-analyzer", ["rust-analyzer", "--version"]),
    ("rls", ["rls", "--version"]),
    ("gdb", ["gdb", "--version"]),
    ("lldb", ["lldb", "--version"]),
    ("valgrind", ["valgrind", "--version"]),
)

INSTALL_SUGGESTIONS = (
    "cargo install cargo-watch cargo-edit cargo-audit cargo-outdated",
    "cargo install cargo-expand flamegraph cargo-criterion",
    "Install rust-analyzer via your editor or rustup component add rust-analyzer",
)


def tool_probes(custom_tools: list[str]) -> list[tuple[str, list[str]]]:
    """Return the probe list: built-in tools then configured extras."""
    probes = list(KNOWN_TOOLS)
    known = {name for name, _ in probes}
    for name in custom_tools:
        if name not in known:
            probes.append((name, [name, "--version"]))
            known.add(name)
    return probes


def resolve_program(program: str, check_paths: list[str]) -> str:
    """Find a program on PATH, falling back to the configured directories."""
    if not check_paths or shutil.which(program):
        return program
    found = shutil.which(program, path=os.pathsep.join(check_paths))
    if found:
        logger.debug("Resolved %s to %s", program, found)
        return found
    return program


async def probe_tool(deps: Dependencies, name: str, argv: list[str]) -> ToolStatus:
    """Check one tool by running its version command."""
    program = resolve_program(argv[0], deps.config.tools.check_paths)
    outcome = await try_run(deps, program, argv[1:])
    if not succeeded(outcome):
        return ToolStatus(name=name, available=False)
    assert isinstance(outcome, CommandResult)
    version = first_line(outcome.stdout, default="unknown version")
    return ToolStatus(name=name, available=True, version=version)


async def run_tools(deps: Dependencies) -> Report:
    """Report which development tools are installed.

    Missing tools are informational; the report is always ok.
    """
    logger.info("Scanning for Rust development tools")

    found: list[ToolStatus] = []
    missing: list[ToolStatus] = []
    for name, argv in tool_probes(deps.config.tools.custom_tools):
        status = await probe_tool(deps, name, argv)
        (found if status.available else missing).append(status)

    report = Report(
        payload={
            "success": True,
            "found_tools": [tool.to_dict() for tool in found],
            "missing_tools": [tool.to_dict() for tool in missing],
            "summary": {"total_found": len(found), "total_missing": len(missing)},
        }
    )

    report.heading("🔧 Rust Development Tools")
    report.text(f"Found: {len(found)} tools | Missing: {len(missing)} tools")
    report.text()

    if found:
        report.status(Status.SUCCESS, "Available Tools:")
        for tool in found:
            report.text(f"  {tool.name} - {tool.version}")

    if missing:
        report.text()
        report.status(Status.ERROR, "Missing Tools:")
        for tool in missing:
            report.text(f"  {tool.name}")
        report.text()
        report.suggest("Installation suggestions:")
        for suggestion in INSTALL_SUGGESTIONS:
            report.text(f"  • {suggestion}")

    return report
