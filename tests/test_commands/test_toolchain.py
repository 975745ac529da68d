"""Tests for the toolchain command."""

import pytest

from oxygen.commands.toolchain import run_toolchain
from oxygen.models import ToolchainAction


@pytest.mark.asyncio
async def test_list_marks_default(make_deps, fake_runner) -> None:
    """The default toolchain is flagged and reported."""
    runner = fake_runner(
        responses={
            "rustup toolchain list": {
                "stdout": "stable-x86_64-unknown-linux-gnu (default)\nnightly-x86_64-unknown-linux-gnu\n"
            }
        }
    )

    report = await run_toolchain(make_deps(runner=runner), ToolchainAction.LIST)

    assert report.ok is True
    assert report.payload["default"] == "stable-x86_64-unknown-linux-gnu"
    assert report.payload["toolchains"][1] == {
        "name": "nightly-x86_64-unknown-linux-gnu",
        "is_default": False,
        "status": "installed",
    }
    assert "  stable-x86_64-unknown-linux-gnu (default) ✅" in report.lines


@pytest.mark.asyncio
async def test_missing_rustup_suggests_install(make_deps, fake_runner) -> None:
    """Without rustup the report fails softly with a suggestion."""
    runner = fake_runner(missing=("rustup",))

    report = await run_toolchain(make_deps(runner=runner), ToolchainAction.LIST)

    assert report.ok is False
    assert report.payload["error"] == "rustup not found"
    assert report.payload["suggestion"] == "Install rustup from https://rustup.rs"
    assert report.lines[-1] == "💡 Install rustup from https://rustup.rs"


@pytest.mark.asyncio
async def test_install_success_includes_output(make_deps, fake_runner) -> None:
    """A successful install echoes rustup's output."""
    runner = fake_runner(
        responses={
            "rustup toolchain install nightly": {"stdout": "nightly installed - rustc 1.82.0\n"}
        }
    )

    report = await run_toolchain(
        make_deps(runner=runner), ToolchainAction.INSTALL, "nightly"
    )

    assert report.ok is True
    assert report.payload == {
        "success": True,
        "action": "install",
        "toolchain": "nightly",
        "status": "success",
        "output": "nightly installed - rustc 1.82.0",
    }
    assert "Output: nightly installed - rustc 1.82.0" in report.lines


@pytest.mark.asyncio
async def test_install_failure(make_deps, fake_runner) -> None:
    """A failing rustup exit is reported with its stderr."""
    runner = fake_runner(
        responses={
            "rustup toolchain install bogus": {
                "returncode": 1,
                "stderr": "error: invalid toolchain name: 'bogus'\n",
            }
        }
    )

    report = await run_toolchain(make_deps(runner=runner), ToolchainAction.INSTALL, "bogus")

    assert report.ok is False
    assert report.payload["status"] == "error"
    assert report.payload["error"] == "error: invalid toolchain name: 'bogus'"
    assert report.lines[0] == "❌ Failed to install toolchain: bogus"


@pytest.mark.asyncio
async def test_default_and_remove(make_deps, fake_runner) -> None:
    """Default and remove map to the matching rustup subcommands."""
    runner = fake_runner()
    deps = make_deps(runner=runner)

    default = await run_toolchain(deps, ToolchainAction.DEFAULT, "beta")
    removed = await run_toolchain(deps, ToolchainAction.REMOVE, "beta")

    assert runner.calls == ["rustup default beta", "rustup toolchain uninstall beta"]
    assert default.payload["action"] == "set_default"
    assert removed.payload["action"] == "remove"


@pytest.mark.asyncio
async def test_mutation_without_name(make_deps, fake_runner) -> None:
    """Install, default and remove need a toolchain name."""
    runner = fake_runner(forbid=True)

    report = await run_toolchain(make_deps(runner=runner), ToolchainAction.REMOVE)

    assert report.ok is False
    assert "toolchain name is required" in report.payload["error"]


@pytest.mark.asyncio
async def test_show_active(make_deps, fake_runner) -> None:
    """show prints the active toolchain line."""
    runner = fake_runner(
        responses={
            "rustup show active-toolchain": {
                "stdout": "stable-x86_64-unknown-linux-gnu (default)\n"
            }
        }
    )

    report = await run_toolchain(make_deps(runner=runner), ToolchainAction.SHOW)

    assert report.payload["active_toolchain"] == "stable-x86_64-unknown-linux-gnu (default)"
