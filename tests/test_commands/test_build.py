"""Tests for the build command."""

from pathlib import Path

import pytest

from oxygen.commands.base import NOT_A_PROJECT
from oxygen.commands.build import run_build
from oxygen.config import BuildConfig, Config
from oxygen.exceptions import ExecError


@pytest.mark.asyncio
async def test_build_outside_project_spawns_nothing(make_deps, fake_runner) -> None:
    """Without Cargo.toml the build fails before any process starts."""
    runner = fake_runner(forbid=True)

    report = await run_build(make_deps(runner=runner))

    assert report.ok is False
    assert report.payload["error"] == NOT_A_PROJECT
    assert report.payload["is_rust_project"] is False
    assert runner.calls == []


@pytest.mark.asyncio
async def test_release_build_reports_binary(make_deps, fake_runner, rust_project: Path) -> None:
    """A successful release build reports duration and binary size."""
    binary = rust_project / "target" / "release" / "demo"
    binary.parent.mkdir(parents=True)
    binary.write_bytes(b"\0" * 2048)
    runner = fake_runner()

    report = await run_build(make_deps(runner=runner))

    assert report.ok is True
    assert runner.calls == ["cargo build --release"]
    assert report.payload["duration"] == "250ms"
    assert report.payload["binary"] == {
        "path": "target/release/demo",
        "size_bytes": 2048,
        "size_formatted": "2.00 KB",
    }
    assert "✅ Build completed successfully in 250ms" in report.lines
    assert "📦 Binary: target/release/demo (2.00 KB)" in report.lines


@pytest.mark.asyncio
async def test_debug_build_uses_configured_target_dir(
    make_deps, fake_runner, rust_project: Path
) -> None:
    """release_by_default=false builds debug and looks in target_dir."""
    binary = rust_project / "out" / "x86_64-unknown-linux-gnu" / "debug" / "demo"
    binary.parent.mkdir(parents=True)
    binary.write_bytes(b"\0" * 10)
    config = Config(build=BuildConfig(release_by_default=False, target_dir="out"))
    runner = fake_runner()

    report = await run_build(make_deps(runner=runner, config=config))

    assert runner.calls == ["cargo build"]
    assert report.payload["binary"]["path"] == "out/x86_64-unknown-linux-gnu/debug/demo"


@pytest.mark.asyncio
async def test_failed_build_surfaces_output(make_deps, fake_runner, rust_project: Path) -> None:
    """A non-zero exit is reported with the compiler output."""
    runner = fake_runner(
        responses={
            "cargo build --release": {
                "returncode": 101,
                "stderr": "error[E0308]: mismatched types",
            }
        }
    )

    report = await run_build(make_deps(runner=runner))

    assert report.ok is False
    assert report.payload["error"] == "cargo build failed"
    assert report.payload["binary"] is None
    assert "error[E0308]: mismatched types" in report.lines
    assert report.lines[0] == "❌ Build failed after 250ms"


@pytest.mark.asyncio
async def test_build_warnings_shown(make_deps, fake_runner, rust_project: Path) -> None:
    """stderr of a successful build is shown as warnings unless disabled."""
    responses = {"cargo build --release": {"stderr": "warning: unused variable"}}

    report = await run_build(make_deps(runner=fake_runner(responses=responses)))
    assert "warning: unused variable" in report.lines

    quiet = Config(build=BuildConfig(show_warnings=False))
    report = await run_build(make_deps(runner=fake_runner(responses=responses), config=quiet))
    assert "warning: unused variable" not in report.lines


@pytest.mark.asyncio
async def test_missing_cargo_raises(make_deps, fake_runner, rust_project: Path) -> None:
    """When cargo cannot start the ExecError reaches the caller."""
    with pytest.raises(ExecError):
        await run_build(make_deps(runner=fake_runner(missing=("cargo",))))
