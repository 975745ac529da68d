"""Tests for the doctor command."""

import pytest

from oxygen.commands.doctor import collect_checks, run_doctor


@pytest.fixture(autouse=True)
def rust_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """A conventional rustup environment."""
    monkeypatch.setenv("CARGO_HOME", "/home/dev/.cargo")
    monkeypatch.setenv("RUSTUP_HOME", "/home/dev/.rustup")
    monkeypatch.setenv("PATH", "/home/dev/.cargo/bin:/usr/bin")


RESPONSES = {
    "rustc --version": {"stdout": "rustc 1.80.0 (051478957 2024-07-21)\n"},
    "cargo --version": {"stdout": "cargo 1.80.0 (376290515 2024-07-16)\n"},
    "rustup show": {"stdout": "active toolchain\n----------------\nstable (default)\n"},
    "cargo clippy --version": {"stdout": "clippy 0.1.80 (0514789 2024-07-21)\n"},
    "cargo fmt --version": {"stdout": "rustfmt 1.7.0-stable\n"},
}


@pytest.mark.asyncio
async def test_healthy_environment(make_deps, fake_runner) -> None:
    """All checks pass in a complete environment."""
    runner = fake_runner(responses=RESPONSES)

    report = await run_doctor(make_deps(runner=runner))

    assert report.ok is True
    assert report.payload["overall_status"] == "healthy"
    names = [c["name"] for c in report.payload["checks"]]
    assert names == [
        "Rust Compiler",
        "Cargo",
        "Rustup",
        "Tool: clippy",
        "Tool: rustfmt",
        "Environment: CARGO_HOME",
        "Environment: RUSTUP_HOME",
        "Environment: PATH",
        "Current Directory",
    ]
    assert report.lines[0] == "🩺 Environment Health: ✅ Healthy"
    assert report.payload["checks"][2]["value"] == "stable (default)"


@pytest.mark.asyncio
async def test_missing_compiler_is_unhealthy(make_deps, fake_runner) -> None:
    """Without rustc the environment has issues and suggestions are shown."""
    runner = fake_runner(responses=RESPONSES, missing=("rustc",))

    report = await run_doctor(make_deps(runner=runner))

    assert report.ok is False
    assert report.payload["overall_status"] == "issues_found"
    assert report.payload["checks"][0]["status"] == "error"
    assert report.lines[0] == "🩺 Environment Health: ⚠️  Issues Found"
    assert "💡 Suggestions:" in report.lines


@pytest.mark.asyncio
async def test_missing_companion_tool_stays_healthy(make_deps, fake_runner) -> None:
    """A missing clippy is a warning only."""
    responses = dict(RESPONSES)
    responses["cargo clippy --version"] = {
        "returncode": 101,
        "stderr": "error: no such command: `clippy`",
    }
    runner = fake_runner(responses=responses, missing=("rustup",))

    report = await run_doctor(make_deps(runner=runner))

    assert report.ok is True
    assert report.payload["overall_status"] == "healthy"
    statuses = {c["name"]: c["status"] for c in report.payload["checks"]}
    assert statuses["Tool: clippy"] == "warning"
    assert statuses["Rustup"] == "warning"


@pytest.mark.asyncio
async def test_unset_path_is_unhealthy(make_deps, fake_runner, monkeypatch) -> None:
    """PATH is the one required environment variable."""
    monkeypatch.delenv("PATH")

    report = await run_doctor(make_deps(runner=fake_runner(responses=RESPONSES)))

    assert report.ok is False
    path_check = report.payload["checks"][7]
    assert path_check == {
        "name": "Environment: PATH",
        "status": "error",
        "message": "PATH is not set",
    }


@pytest.mark.asyncio
async def test_path_without_cargo_warns(make_deps, fake_runner, monkeypatch) -> None:
    """A PATH without cargo warns without changing the verdict."""
    monkeypatch.setenv("PATH", "/usr/bin")
    monkeypatch.delenv("CARGO_HOME")

    report = await run_doctor(make_deps(runner=fake_runner(responses=RESPONSES)))

    assert report.ok is True
    statuses = {c["name"]: c["status"] for c in report.payload["checks"]}
    assert statuses["Environment: PATH"] == "warning"
    assert statuses["Environment: CARGO_HOME"] == "warning"


@pytest.mark.asyncio
async def test_every_check_runs(make_deps, fake_runner, rust_project) -> None:
    """Checks do not short-circuit on failure."""
    runner = fake_runner(missing=("rustc", "cargo", "rustup"))

    checks = await collect_checks(make_deps(runner=runner))

    assert len(checks) == 9
    assert runner.calls == [
        "rustc --version",
        "cargo --version",
        "rustup show",
        "cargo clippy --version",
        "cargo fmt --version",
    ]
    assert checks[-1].message == "In a Rust project directory"
