"""Dual-mode command results.

Handlers build a Report holding both the machine payload and the human
lines; the CLI decides which one to print.
"""

import json
import sys
from dataclasses import dataclass, field
from typing import Any, TextIO

from oxygen.ui.icons import Status, icon

SUGGESTION = "💡"


@dataclass
class Report:
    """Outcome of one subcommand."""

    payload: dict[str, Any] = field(default_factory=dict)
    lines: list[str] = field(default_factory=list)
    ok: bool = True

    def __post_init__(self) -> None:
        self.payload.setdefault("success", self.ok)

    def text(self, line: str = "") -> "Report":
        """Append a human output line."""
        self.lines.append(line)
        return self

    def status(self, status: Status | str, message: str) -> "Report":
        """Append a line prefixed with a status glyph."""
        return self.text(f"{icon(status)} {message}")

    def heading(self, title: str) -> "Report":
        """Append a title underlined to its width."""
        self.text(title)
        return self.text("=" * len(title))

    def suggest(self, suggestion: str, indent: str = "") -> "Report":
        """Append a suggestion line."""
        return self.text(f"{indent}{SUGGESTION} {suggestion}")

    def fail(self, error: str) -> "Report":
        """Mark the report failed and record the error."""
        self.ok = False
        self.payload["success"] = False
        self.payload.setdefault("error", error)
        return self

    def render_json(self) -> str:
        """Render the payload as one pretty-printed document."""
        return json.dumps(self.payload, indent=2, ensure_ascii=False)

    def render_text(self) -> str:
        """Render the human lines."""
        return "\n".join(self.lines)


def failure(error: str, message: str | None = None, **fields: Any) -> Report:
    """Build a failed report for a precondition or soft failure.

    Args:
        error: Machine-readable error text.
        message: Human line, defaults to ``error``.
        **fields: Extra payload fields such as ``suggestion``.
    """
    report = Report(payload={"success": False, "error": error, **fields}, ok=False)
    report.status(Status.ERROR, message or error)
    suggestion = fields.get("suggestion")
    if suggestion:
        report.suggest(suggestion)
    return report


def emit(report: Report, json_output: bool, stream: TextIO | None = None) -> None:
    """Print a report in the selected mode."""
    stream = stream or sys.stdout
    body = report.render_json() if json_output else report.render_text()
    stream.write(body + "\n")
