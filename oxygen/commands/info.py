"""Info command: project manifest, git state and common files."""

import logging
from typing import Any

from oxygen.commands.base import require_project, succeeded, try_run
from oxygen.dependencies import Dependencies
from oxygen.models import CommandResult
from oxygen.services.parsers import parse_last_commit
from oxygen.ui import Report
from oxygen.utils.project import is_git_repo, read_manifest

logger = logging.getLogger(__name__)

COMMON_FILES = (
    "README.md",
    "LICENSE",
    "CHANGELOG.md",
    ".gitignore",
    "rust-toolchain.toml",
)

PACKAGE_FIELDS = ("name", "version", "edition", "authors", "description")


def _table_len(value: Any) -> int:
    return len(value) if isinstance(value, dict) else 0


def manifest_info(manifest: dict[str, Any]) -> dict[str, Any]:
    """Extract package fields and dependency counts from a parsed manifest."""
    info: dict[str, Any] = {}
    package = manifest.get("package")
    if isinstance(package, dict):
        info["package"] = {key: package.get(key) for key in PACKAGE_FIELDS}
    if "dependencies" in manifest:
        info["dependencies_count"] = _table_len(manifest["dependencies"])
    if "dev-dependencies" in manifest:
        info["dev_dependencies_count"] = _table_len(manifest["dev-dependencies"])
    return info


async def git_info(deps: Dependencies) -> dict[str, Any]:
    """Collect branch, cleanliness and last commit for the repository."""
    if not is_git_repo(deps.cwd):
        return {"is_git_repo": False}

    git: dict[str, Any] = {"is_git_repo": True}

    outcome = await try_run(deps, "git", ["branch", "--show-current"])
    if succeeded(outcome):
        assert isinstance(outcome, CommandResult)
        git["current_branch"] = outcome.stdout.strip()

    outcome = await try_run(deps, "git", ["status", "--porcelain"])
    if succeeded(outcome):
        assert isinstance(outcome, CommandResult)
        dirty = len(outcome.stdout.splitlines())
        git["dirty_files"] = dirty
        git["is_clean"] = dirty == 0

    outcome = await try_run(
        deps, "git", ["log", "-1", "--pretty=format:%H|%s|%an|%ad", "--date=short"]
    )
    if succeeded(outcome):
        assert isinstance(outcome, CommandResult)
        commit = parse_last_commit(outcome.stdout)
        if commit:
            git["last_commit"] = commit

    return git


async def run_info(deps: Dependencies) -> Report:
    """Describe the project in the working directory.

    Raises:
        ManifestError: If Cargo.toml cannot be read or parsed.
    """
    precondition = require_project(deps)
    if precondition:
        return precondition

    logger.info("Gathering project information")

    info: dict[str, Any] = {"is_rust_project": True}
    info.update(manifest_info(read_manifest(deps.cwd)))
    info["git"] = await git_info(deps)
    info["common_files"] = [name for name in COMMON_FILES if (deps.cwd / name).exists()]
    info["has_target_dir"] = (deps.cwd / "target").is_dir()

    report = Report(payload={"success": True, **info})
    report.heading("📦 Project Information")

    package = info.get("package") or {}
    for label, key in (
        ("Name", "name"),
        ("Version", "version"),
        ("Edition", "edition"),
        ("Description", "description"),
    ):
        if isinstance(package.get(key), str):
            report.text(f"{label}: {package[key]}")
    authors = package.get("authors")
    if isinstance(authors, list) and authors:
        report.text(f"Authors: {', '.join(str(author) for author in authors)}")
    if "dependencies_count" in info:
        report.text(f"Dependencies: {info['dependencies_count']}")
    if "dev_dependencies_count" in info:
        report.text(f"Dev Dependencies: {info['dev_dependencies_count']}")
    report.text()

    git = info["git"]
    if git["is_git_repo"]:
        report.text("📝 Git Status:")
        if "current_branch" in git:
            report.text(f"  Branch: {git['current_branch']}")
        if "is_clean" in git:
            status = "Clean" if git["is_clean"] else "Modified files present"
            report.text(f"  Status: {status}")
        commit = git.get("last_commit")
        if commit:
            report.text(
                f"  Last Commit: {commit['message']} by {commit['author']} ({commit['date']})"
            )
    else:
        report.text("📝 Git: Not a git repository")
    report.text()

    if info["common_files"]:
        report.text("📄 Project Files:")
        for name in info["common_files"]:
            report.text(f"  ✅ {name}")
    if info["has_target_dir"]:
        report.text("  📁 target/ directory exists")

    return report
