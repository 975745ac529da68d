"""Tests for local process execution."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from oxygen.exceptions import ExecError
from oxygen.models import CommandResult
from oxygen.services.runner import (
    ProcessRunner,
    is_missing_tool,
    run_command,
    run_command_with_timing,
)


def _mock_process(stdout: bytes = b"", stderr: bytes = b"", returncode: int = 0) -> MagicMock:
    proc = MagicMock()
    proc.communicate = AsyncMock(return_value=(stdout, stderr))
    proc.returncode = returncode
    return proc


@pytest.mark.asyncio
async def test_run_command_captures_output() -> None:
    """run_command returns decoded stdout, stderr and exit code."""
    proc = _mock_process(stdout=b"rustc 1.80.0\n", stderr=b"", returncode=0)

    with patch(
        "oxygen.services.runner.asyncio.create_subprocess_exec",
        AsyncMock(return_value=proc),
    ) as mock_exec:
        result = await run_command("rustc", ["--version"], cwd="/work")

    assert result.stdout == "rustc 1.80.0\n"
    assert result.returncode == 0
    assert result.succeeded is True
    assert result.args == ("--version",)
    args, kwargs = mock_exec.call_args
    assert args == ("rustc", "--version")
    assert kwargs["cwd"] == "/work"


@pytest.mark.asyncio
async def test_run_command_nonzero_exit_is_not_an_error() -> None:
    """A failing process is returned as a result, not raised."""
    proc = _mock_process(stderr=b"error[E0425]: cannot find value", returncode=101)

    with patch(
        "oxygen.services.runner.asyncio.create_subprocess_exec",
        AsyncMock(return_value=proc),
    ):
        result = await run_command("cargo", ["build"])

    assert result.returncode == 101
    assert result.succeeded is False
    assert "E0425" in result.stderr


@pytest.mark.asyncio
async def test_run_command_missing_program_raises_exec_error() -> None:
    """A program that cannot be started raises ExecError with the command line."""
    with patch(
        "oxygen.services.runner.asyncio.create_subprocess_exec",
        AsyncMock(side_effect=FileNotFoundError(2, "No such file or directory")),
    ):
        with pytest.raises(ExecError, match="Failed to execute command: cargo bloat"):
            await run_command("cargo", ["bloat"])


@pytest.mark.asyncio
async def test_run_command_replaces_invalid_utf8() -> None:
    """Invalid UTF-8 bytes are replaced rather than failing the decode."""
    proc = _mock_process(stdout=b"ok \xff\xfe done")

    with patch(
        "oxygen.services.runner.asyncio.create_subprocess_exec",
        AsyncMock(return_value=proc),
    ):
        result = await run_command("git", ["log"])

    assert "�" in result.stdout
    assert result.stdout.startswith("ok ")


@pytest.mark.asyncio
async def test_run_command_logs_command_line() -> None:
    """Each invocation is logged with the full command line."""
    proc = _mock_process()

    with patch(
        "oxygen.services.runner.asyncio.create_subprocess_exec",
        AsyncMock(return_value=proc),
    ), patch("oxygen.services.runner.logger") as mock_logger:
        await run_command("cargo", ["tree", "--format", "{p} {f}"])

    mock_logger.info.assert_called_once_with(
        "Running command: %s", "cargo tree --format '{p} {f}'"
    )


@pytest.mark.asyncio
async def test_run_command_with_timing_records_duration() -> None:
    """The timed variant measures wall-clock time until exit."""
    proc = _mock_process(stdout=b"done")

    with patch(
        "oxygen.services.runner.asyncio.create_subprocess_exec",
        AsyncMock(return_value=proc),
    ), patch("oxygen.services.runner.time") as mock_time:
        mock_time.perf_counter.side_effect = [10.0, 12.5]
        result = await run_command_with_timing("cargo", ["build"])

    assert result.duration == pytest.approx(2.5)
    assert result.stdout == "done"


@pytest.mark.asyncio
async def test_process_runner_uses_its_working_directory() -> None:
    """ProcessRunner passes its cwd to every child process."""
    proc = _mock_process()
    runner = ProcessRunner(cwd="/projects/demo")

    with patch(
        "oxygen.services.runner.asyncio.create_subprocess_exec",
        AsyncMock(return_value=proc),
    ) as mock_exec:
        await runner.run("cargo", ["check"])
        await runner.run_timed("cargo", ["check"])

    assert mock_exec.call_count == 2
    for call in mock_exec.call_args_list:
        assert call.kwargs["cwd"] == "/projects/demo"


class TestIsMissingTool:
    """Tests for missing tool detection."""

    def test_exec_error_is_missing(self) -> None:
        """A program that never started is missing."""
        assert is_missing_tool(ExecError("cargo-bloat", "not found")) is True

    def test_missing_cargo_plugin_is_missing(self) -> None:
        """Cargo's 'no such command' for an absent plugin counts as missing."""
        result = CommandResult(
            command="cargo",
            args=("outdated",),
            returncode=101,
            stderr="error: no such command: `outdated`",
        )
        assert is_missing_tool(result) is True

    def test_plugin_failure_is_not_missing(self) -> None:
        """A plugin that ran and failed is not missing."""
        result = CommandResult(
            command="cargo", args=("audit",), returncode=1, stderr="error: lockfile missing"
        )
        assert is_missing_tool(result) is False

    def test_success_is_not_missing(self) -> None:
        """A successful run is never missing."""
        assert is_missing_tool(CommandResult(command="cargo")) is False
