"""Init command: create a new project from a built-in template."""

import logging
from pathlib import Path
from typing import Any

from oxygen.commands.base import error_text, succeeded, try_run
from oxygen.commands.templates import (
    BASIC_MAIN_RS,
    BASIC_PROFILES,
    BASIC_README,
    CLI_CARGO_TOML,
    CLI_MAIN_RS,
    DEFAULT_TEMPLATE,
    LIBRARY_LIB_RS,
    TEMPLATES,
    WEB_API_CARGO_TOML,
    WEB_API_MAIN_RS,
    WORKSPACE_CARGO_TOML,
)
from oxygen.dependencies import Dependencies
from oxygen.exceptions import ScaffoldError
from oxygen.ui import Report, Status, failure

logger = logging.getLogger(__name__)

USAGE = "oxy init <project_name> [--template <template>]"


async def _cargo_init(deps: Dependencies, path: str, name: str, lib: bool = False) -> None:
    args = ["init", path, "--name", name]
    if lib:
        args.insert(2, "--lib")
    outcome = await try_run(deps, "cargo", args)
    if not succeeded(outcome):
        raise ScaffoldError(error_text(outcome))


async def _create_basic(deps: Dependencies, project_dir: Path, name: str) -> Report:
    await _cargo_init(deps, name, name)
    (project_dir / "src" / "main.rs").write_text(BASIC_MAIN_RS)
    with (project_dir / "Cargo.toml").open("a") as f:
        f.write(BASIC_PROFILES)
    (project_dir / "README.md").write_text(BASIC_README.format(name=name))

    report = Report(
        payload={
            "status": "success",
            "project_name": name,
            "template": "basic",
            "files_created": ["src/main.rs", "Cargo.toml", "README.md"],
        }
    )
    report.status(Status.SUCCESS, f"Created basic Rust project: {name}")
    report.text("📁 Project structure:")
    report.text(f"  {name}/")
    report.text("    ├── src/main.rs")
    report.text("    ├── Cargo.toml")
    report.text("    └── README.md")
    report.text()
    report.suggest(f"Next steps: cd {name} && cargo run")
    return report


async def _create_library(deps: Dependencies, project_dir: Path, name: str) -> Report:
    await _cargo_init(deps, name, name, lib=True)
    crate_name = name.replace("-", "_")
    (project_dir / "src" / "lib.rs").write_text(
        LIBRARY_LIB_RS.format(name=name, crate_name=crate_name)
    )

    report = Report(
        payload={
            "status": "success",
            "project_name": name,
            "template": "library",
            "files_created": ["src/lib.rs", "Cargo.toml"],
        }
    )
    report.status(Status.SUCCESS, f"Created library project: {name}")
    report.suggest("Next steps:")
    report.text(f"  cd {name} && cargo test")
    report.text("  cargo doc --open")
    return report


async def _create_cli(deps: Dependencies, project_dir: Path, name: str) -> Report:
    await _cargo_init(deps, name, name)
    (project_dir / "Cargo.toml").write_text(CLI_CARGO_TOML.format(name=name))
    (project_dir / "src" / "main.rs").write_text(CLI_MAIN_RS)

    report = Report(
        payload={
            "status": "success",
            "project_name": name,
            "template": "cli",
            "dependencies": ["clap", "anyhow", "tracing", "tracing-subscriber"],
        }
    )
    report.status(Status.SUCCESS, f"Created CLI project: {name}")
    report.suggest("Try: cargo run -- hello --name YourName")
    return report


async def _create_web_api(deps: Dependencies, project_dir: Path, name: str) -> Report:
    await _cargo_init(deps, name, name)
    (project_dir / "Cargo.toml").write_text(WEB_API_CARGO_TOML.format(name=name))
    (project_dir / "src" / "main.rs").write_text(WEB_API_MAIN_RS)

    report = Report(
        payload={
            "status": "success",
            "project_name": name,
            "template": "web-api",
            "server_url": "http://localhost:3000",
        }
    )
    report.status(Status.SUCCESS, f"Created web API project: {name}")
    report.suggest("Start with: cargo run")
    report.text("   API will be available at http://localhost:3000")
    return report


async def _create_workspace(deps: Dependencies, project_dir: Path, name: str) -> Report:
    (project_dir / "crates").mkdir()
    (project_dir / "Cargo.toml").write_text(WORKSPACE_CARGO_TOML)

    core, cli = f"{name}-core", f"{name}-cli"
    await _cargo_init(deps, f"{name}/crates/core", core, lib=True)
    await _cargo_init(deps, f"{name}/crates/cli", cli)

    report = Report(
        payload={
            "status": "success",
            "project_name": name,
            "template": "workspace",
            "crates": [core, cli],
        }
    )
    report.status(Status.SUCCESS, f"Created workspace project: {name}")
    report.text("📁 Workspace structure:")
    report.text(f"  {name}/")
    report.text("    ├── Cargo.toml (workspace)")
    report.text("    └── crates/")
    report.text("        ├── core/ (library)")
    report.text("        └── cli/ (binary)")
    report.text()
    report.suggest(f"Build all: cd {name} && cargo build")
    return report


CREATORS = {
    "basic": _create_basic,
    "binary": _create_basic,
    "library": _create_library,
    "cli": _create_cli,
    "web-api": _create_web_api,
    "workspace": _create_workspace,
}


def list_templates() -> Report:
    """Describe the available templates."""
    report = Report(
        payload={
            "success": True,
            "templates": {name: t.to_dict() for name, t in TEMPLATES.items()},
        }
    )
    report.heading("📋 Available Project Templates")
    for name, template in TEMPLATES.items():
        report.text(f"🔹 {name} - {template.description}")
    report.text()
    report.suggest("Usage: oxy init <project_name> --template <template_name>")
    return report


async def run_init(
    deps: Dependencies,
    name: str | None = None,
    template: str | None = None,
    list_only: bool = False,
) -> Report:
    """Create a project directory from a template.

    Validation happens before anything touches the filesystem, so a
    rejected request leaves no directory behind.

    Args:
        deps: Dependencies container.
        name: Project and directory name.
        template: Template name, ``basic`` when omitted.
        list_only: List templates instead of creating a project.
    """
    if list_only:
        return list_templates()

    if not name:
        report = failure("Project name is required", usage=USAGE)
        report.text(f"Usage: {USAGE}")
        return report

    template_name = template or DEFAULT_TEMPLATE
    if template_name not in TEMPLATES:
        available = list(TEMPLATES)
        report = failure(
            "Template not found",
            f"Template '{template_name}' not found",
            template=template_name,
            available_templates=available,
        )
        report.text("Available templates:")
        for available_name in available:
            report.text(f"  - {available_name}")
        return report

    project_dir = deps.cwd / name
    if project_dir.exists():
        return failure(
            "Directory already exists",
            f"Directory '{name}' already exists",
            project_name=name,
        )

    logger.info("Initializing project %s with template %s", name, template_name)
    try:
        project_dir.mkdir(parents=True)
    except OSError as e:
        logger.warning("Creating %s failed: %s", project_dir, e)
        return _scaffold_failure(name, template_name, str(e))

    try:
        return await CREATORS[template_name](deps, project_dir, name)
    except ScaffoldError as e:
        logger.warning("cargo init failed for %s: %s", name, e)
        return _scaffold_failure(name, template_name, str(e))
    except OSError as e:
        logger.warning("Writing template files for %s failed: %s", name, e)
        return _scaffold_failure(name, template_name, str(e))


def _scaffold_failure(name: str, template: str, error: str) -> Report:
    fields: dict[str, Any] = {"status": "error", "project_name": name, "template": template}
    return failure(error, f"Failed to create project: {error}", **fields)
