"""Shared fixtures: a recording command runner and dependency factory."""

import dataclasses
import shlex
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from oxygen.config import Config
from oxygen.dependencies import Dependencies
from oxygen.exceptions import ExecError
from oxygen.models import CommandResult

Response = dict[str, Any] | Callable[[], dict[str, Any]] | Exception


class FakeRunner:
    """CommandRunner double that records every command line.

    Responses are keyed by the full command line. Programs listed in
    ``missing`` raise ExecError as if they were not on PATH. Anything else
    exits zero with empty output.
    """

    def __init__(
        self,
        responses: dict[str, Response] | None = None,
        missing: tuple[str, ...] = (),
        forbid: bool = False,
    ) -> None:
        self.responses = responses or {}
        self.missing = set(missing)
        self.forbid = forbid
        self.calls: list[str] = []

    async def run(self, command: str, args: list[str] | tuple[str, ...] = ()) -> CommandResult:
        line = shlex.join([command, *args])
        self.calls.append(line)
        if self.forbid:
            raise AssertionError(f"unexpected process spawn: {line}")
        if command in self.missing:
            raise ExecError(line, FileNotFoundError(2, "No such file or directory"))

        response = self.responses.get(line, {})
        if isinstance(response, Exception):
            raise response
        if callable(response):
            response = response()
        return CommandResult(command=command, args=tuple(args), **response)

    async def run_timed(
        self, command: str, args: list[str] | tuple[str, ...] = ()
    ) -> CommandResult:
        result = await self.run(command, args)
        return dataclasses.replace(result, duration=0.25)


@pytest.fixture
def fake_runner() -> type[FakeRunner]:
    """The FakeRunner class, for tests that build their own."""
    return FakeRunner


@pytest.fixture
def make_deps(tmp_path: Path) -> Callable[..., Dependencies]:
    """Factory for Dependencies rooted in a temporary directory."""

    def _make(
        runner: FakeRunner | None = None,
        config: Config | None = None,
        cwd: Path | None = None,
    ) -> Dependencies:
        return Dependencies(
            config=config or Config(),
            runner=runner or FakeRunner(),
            cwd=cwd or tmp_path,
        )

    return _make


@pytest.fixture
def rust_project(tmp_path: Path) -> Path:
    """A directory with a minimal Cargo manifest."""
    (tmp_path / "Cargo.toml").write_text(
        '[package]\nname = "demo"\nversion = "0.1.0"\nedition = "2021"\n'
    )
    return tmp_path
