"""Command-line interface for Oxygen.

Parses arguments, sets up logging once, runs the selected handler and
prints its Report. Hard errors are caught here and nowhere else.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Optional

import typer

from oxygen import __version__
from oxygen.commands import (
    run_build,
    run_check,
    run_deps,
    run_doctor,
    run_env,
    run_gpg,
    run_info,
    run_init,
    run_toolchain,
    run_tools,
)
from oxygen.config import Settings
from oxygen.dependencies import Dependencies
from oxygen.exceptions import OxygenError
from oxygen.models import DepsAction, GpgAction, ToolchainAction
from oxygen.ui import Report, emit, failure
from oxygen.utils.console import configure_logging

logger = logging.getLogger(__name__)

Handler = Callable[[Dependencies], Awaitable[Report]]

app = typer.Typer(
    name="oxy",
    help="Oxygen: a Rust development companion wrapping rustc, cargo, rustup, git and gpg.",
    no_args_is_help=True,
    add_completion=False,
)
toolchain_app = typer.Typer(help="Manage Rust toolchains with rustup.", no_args_is_help=True)
deps_app = typer.Typer(help="Analyze project dependencies.", no_args_is_help=True)
gpg_app = typer.Typer(help="Sign and verify commits, tags and files.", no_args_is_help=True)

app.add_typer(toolchain_app, name="toolchain")
app.add_typer(deps_app, name="deps")
app.add_typer(gpg_app, name="gpg")


@dataclass
class CliState:
    """Global options shared with every subcommand."""

    json_output: bool = False
    log_level: str = "WARNING"
    settings: Optional[Settings] = None


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"oxy {__version__}")
        raise typer.Exit()


@app.callback()
def global_options(
    ctx: typer.Context,
    json_output: bool = typer.Option(
        False, "--json", help="Print one JSON document instead of text."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Log debug output to stderr."
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
) -> None:
    """Configure logging and output mode before any subcommand runs."""
    settings = Settings.from_env()
    level = "DEBUG" if verbose else settings.log_level
    configure_logging(level=level, use_colors=settings.log_colors)
    logger.debug("Logging configured: level=%s", level)
    ctx.obj = CliState(json_output=json_output, log_level=level, settings=settings)


def _state(ctx: typer.Context) -> CliState:
    state = ctx.find_object(CliState)
    return state if state is not None else CliState()


def execute(ctx: typer.Context, handler: Handler) -> None:
    """Run a handler, print its report and set the exit status.

    Exit status is 1 when the report is not ok, otherwise 0.
    """
    state = _state(ctx)
    json_output = state.json_output

    try:
        deps = Dependencies.create()
        if state.settings is not None:
            deps.settings = state.settings
        json_output = json_output or deps.config.output.json_by_default
        if not deps.config.output.color:
            configure_logging(level=state.log_level, use_colors=False)
        report = asyncio.run(handler(deps))
    except OxygenError as e:
        logger.error("%s", e)
        report = failure(str(e))

    emit(report, json_output)
    if not report.ok:
        raise typer.Exit(code=1)


@app.command()
def build(ctx: typer.Context) -> None:
    """Build the project with timing and binary size."""
    execute(ctx, run_build)


@app.command()
def check(ctx: typer.Context) -> None:
    """Run cargo fmt --check, cargo clippy and cargo check."""
    execute(ctx, run_check)


@app.command("lint")
def lint(ctx: typer.Context) -> None:
    """Alias for check."""
    execute(ctx, run_check)


@app.command()
def doctor(ctx: typer.Context) -> None:
    """Diagnose the Rust environment."""
    execute(ctx, run_doctor)


@app.command()
def env(ctx: typer.Context) -> None:
    """Show the Rust environment summary."""
    execute(ctx, run_env)


@app.command()
def info(ctx: typer.Context) -> None:
    """Show project information."""
    execute(ctx, run_info)


@app.command()
def tools(ctx: typer.Context) -> None:
    """List installed Rust development tools."""
    execute(ctx, run_tools)


@app.command()
def init(
    ctx: typer.Context,
    name: Optional[str] = typer.Argument(None, help="Project name and directory."),
    template: Optional[str] = typer.Option(
        None, "--template", "-t", help="Template to use (default: basic)."
    ),
    list_templates: bool = typer.Option(
        False, "--list-templates", help="List available templates."
    ),
) -> None:
    """Create a new project from a template."""
    execute(ctx, lambda deps: run_init(deps, name, template, list_templates))


@toolchain_app.command("list")
def toolchain_list(ctx: typer.Context) -> None:
    """List installed toolchains."""
    execute(ctx, lambda deps: run_toolchain(deps, ToolchainAction.LIST))


@toolchain_app.command("install")
def toolchain_install(
    ctx: typer.Context,
    toolchain: str = typer.Argument(..., help="Toolchain to install, e.g. nightly."),
) -> None:
    """Install a toolchain."""
    execute(ctx, lambda deps: run_toolchain(deps, ToolchainAction.INSTALL, toolchain))


@toolchain_app.command("default")
def toolchain_default(
    ctx: typer.Context,
    toolchain: str = typer.Argument(..., help="Toolchain to make the default."),
) -> None:
    """Set the default toolchain."""
    execute(ctx, lambda deps: run_toolchain(deps, ToolchainAction.DEFAULT, toolchain))


@toolchain_app.command("show")
def toolchain_show(ctx: typer.Context) -> None:
    """Show the active toolchain."""
    execute(ctx, lambda deps: run_toolchain(deps, ToolchainAction.SHOW))


@toolchain_app.command("remove")
def toolchain_remove(
    ctx: typer.Context,
    toolchain: str = typer.Argument(..., help="Toolchain to uninstall."),
) -> None:
    """Uninstall a toolchain."""
    execute(ctx, lambda deps: run_toolchain(deps, ToolchainAction.REMOVE, toolchain))


@deps_app.command("tree")
def deps_tree(ctx: typer.Context) -> None:
    """Show the dependency tree with features."""
    execute(ctx, lambda deps: run_deps(deps, DepsAction.TREE))


@deps_app.command("outdated")
def deps_outdated(ctx: typer.Context) -> None:
    """List outdated dependencies (needs cargo-outdated)."""
    execute(ctx, lambda deps: run_deps(deps, DepsAction.OUTDATED))


@deps_app.command("audit")
def deps_audit(ctx: typer.Context) -> None:
    """Audit dependencies for advisories (needs cargo-audit)."""
    execute(ctx, lambda deps: run_deps(deps, DepsAction.AUDIT))


@deps_app.command("licenses")
def deps_licenses(ctx: typer.Context) -> None:
    """Summarize dependency licenses."""
    execute(ctx, lambda deps: run_deps(deps, DepsAction.LICENSES))


@deps_app.command("size")
def deps_size(ctx: typer.Context) -> None:
    """Break down binary size per crate (needs cargo-bloat)."""
    execute(ctx, lambda deps: run_deps(deps, DepsAction.SIZE))


@gpg_app.command("sign")
def gpg_sign(
    ctx: typer.Context,
    target: str = typer.Argument(..., help="'commit', 'tag' or a file path."),
) -> None:
    """Sign the last commit, the latest tag or a file."""
    execute(ctx, lambda deps: run_gpg(deps, GpgAction.SIGN, target))


@gpg_app.command("verify")
def gpg_verify(
    ctx: typer.Context,
    target: str = typer.Argument(..., help="'commit', 'tag' or a file path."),
) -> None:
    """Verify commit, tag or file signatures."""
    execute(ctx, lambda deps: run_gpg(deps, GpgAction.VERIFY, target))


@gpg_app.command("setup")
def gpg_setup(ctx: typer.Context) -> None:
    """Check the GPG signing setup."""
    execute(ctx, lambda deps: run_gpg(deps, GpgAction.SETUP))


def main() -> None:
    """Console script entry point."""
    app()
