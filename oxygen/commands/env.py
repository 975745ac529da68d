"""Env command: summary of the installed Rust environment."""

import logging
import os
from typing import Any

from oxygen.commands.base import succeeded, try_run
from oxygen.dependencies import Dependencies
from oxygen.models import CommandResult
from oxygen.services.parsers import parse_host_target, parse_rustup_show
from oxygen.ui import Report

logger = logging.getLogger(__name__)

ENV_VARS = ("CARGO_HOME", "RUSTUP_HOME", "RUST_BACKTRACE")
TARGET_LIMIT = 10


async def _stdout(deps: Dependencies, command: str, args: list[str]) -> str | None:
    outcome = await try_run(deps, command, args)
    if not succeeded(outcome):
        return None
    assert isinstance(outcome, CommandResult)
    return outcome.stdout


async def collect_env(deps: Dependencies) -> dict[str, Any]:
    """Gather versions, toolchains, targets and environment variables.

    Fields whose tool is missing or failed are left out.
    """
    info: dict[str, Any] = {}

    rustc_version = await _stdout(deps, "rustc", ["--version"])
    if rustc_version is not None:
        info["rust_version"] = rustc_version.strip()

    cargo_version = await _stdout(deps, "cargo", ["--version"])
    if cargo_version is not None:
        info["cargo_version"] = cargo_version.strip()

    rustup_show = await _stdout(deps, "rustup", ["show"])
    if rustup_show is not None:
        active, installed = parse_rustup_show(rustup_show)
        if active:
            info["active_toolchain"] = active
        info["installed_toolchains"] = installed

    target_list = await _stdout(deps, "rustc", ["--print", "target-list"])
    if target_list is not None:
        info["available_targets"] = target_list.splitlines()[:TARGET_LIMIT]

    verbose_version = await _stdout(deps, "rustc", ["-vV"])
    if verbose_version is not None:
        host = parse_host_target(verbose_version)
        if host:
            info["host_target"] = host

    info["environment"] = {var: os.environ[var] for var in ENV_VARS if var in os.environ}
    return info


async def run_env(deps: Dependencies) -> Report:
    """Summarize the Rust environment."""
    logger.info("Gathering Rust environment information")

    info = await collect_env(deps)
    report = Report(payload={"success": True, **info})

    report.heading("🦀 Rust Environment Summary")
    if "rust_version" in info:
        report.text(f"Rust: {info['rust_version']}")
    if "cargo_version" in info:
        report.text(f"Cargo: {info['cargo_version']}")
    if "active_toolchain" in info:
        report.text(f"Active Toolchain: {info['active_toolchain']}")
    if "host_target" in info:
        report.text(f"Host Target: {info['host_target']}")
    if info.get("installed_toolchains"):
        report.text()
        report.text("Installed Toolchains:")
        for toolchain in info["installed_toolchains"]:
            report.text(f"  {toolchain}")

    report.text()
    report.text("Environment Variables:")
    if not info["environment"]:
        report.text("  (none set)")
    for key, value in info["environment"].items():
        report.text(f"  {key}: {value}")

    return report
