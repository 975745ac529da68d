"""Tests for the info command."""

import pytest

from oxygen.commands.info import manifest_info, run_info
from oxygen.exceptions import ManifestError


def test_manifest_info_counts_tables() -> None:
    """Package fields are copied and dependency tables counted."""
    manifest = {
        "package": {"name": "demo", "version": "0.1.0", "edition": "2021"},
        "dependencies": {"serde": "1", "anyhow": "1"},
        "dev-dependencies": {"tempfile": "3"},
    }

    info = manifest_info(manifest)

    assert info["package"]["name"] == "demo"
    assert info["package"]["description"] is None
    assert info["dependencies_count"] == 2
    assert info["dev_dependencies_count"] == 1


def test_manifest_info_workspace_only() -> None:
    """A virtual manifest has no package section."""
    assert manifest_info({"workspace": {"members": ["crates/*"]}}) == {}


@pytest.mark.asyncio
async def test_outside_project_spawns_nothing(make_deps, fake_runner) -> None:
    """The manifest precondition is checked first."""
    runner = fake_runner(forbid=True)

    report = await run_info(make_deps(runner=runner))

    assert report.ok is False
    assert report.payload["is_rust_project"] is False


@pytest.mark.asyncio
async def test_project_without_git(make_deps, fake_runner, rust_project) -> None:
    """Without .git no git command runs."""
    (rust_project / "README.md").write_text("# demo\n")
    (rust_project / "target").mkdir()
    runner = fake_runner(forbid=True)

    report = await run_info(make_deps(runner=runner))

    assert report.ok is True
    assert report.payload["package"]["name"] == "demo"
    assert report.payload["git"] == {"is_git_repo": False}
    assert report.payload["common_files"] == ["README.md"]
    assert report.payload["has_target_dir"] is True
    assert "📝 Git: Not a git repository" in report.lines
    assert "  📁 target/ directory exists" in report.lines


@pytest.mark.asyncio
async def test_project_with_git(make_deps, fake_runner, rust_project) -> None:
    """Branch, dirty count and last commit are reported."""
    (rust_project / ".git").mkdir()
    runner = fake_runner(
        responses={
            "git branch --show-current": {"stdout": "main\n"},
            "git status --porcelain": {"stdout": " M src/main.rs\n?? notes.txt\n"},
            "git log -1 '--pretty=format:%H|%s|%an|%ad' --date=short": {
                "stdout": "abc123|Add parser|Dev Person|2024-05-01"
            },
        }
    )

    report = await run_info(make_deps(runner=runner))

    git = report.payload["git"]
    assert git["current_branch"] == "main"
    assert git["dirty_files"] == 2
    assert git["is_clean"] is False
    assert git["last_commit"]["author"] == "Dev Person"
    assert "  Status: Modified files present" in report.lines
    assert "  Last Commit: Add parser by Dev Person (2024-05-01)" in report.lines


@pytest.mark.asyncio
async def test_invalid_manifest_raises(make_deps, tmp_path) -> None:
    """A malformed Cargo.toml is a hard error."""
    (tmp_path / "Cargo.toml").write_text("[package\nname = \n")

    with pytest.raises(ManifestError, match="Failed to parse"):
        await run_info(make_deps())


@pytest.mark.asyncio
async def test_authors_are_listed(make_deps, fake_runner, tmp_path) -> None:
    """Manifest authors appear in the human view."""
    (tmp_path / "Cargo.toml").write_text(
        '[package]\nname = "demo"\nversion = "0.1.0"\n'
        'authors = ["Ada <ada@example.com>", "Lin"]\n'
    )

    report = await run_info(make_deps(runner=fake_runner(forbid=True)))

    assert report.payload["package"]["authors"] == ["Ada <ada@example.com>", "Lin"]
    assert "Authors: Ada <ada@example.com>, Lin" in report.lines
