"""Diagnostic check data models."""

from dataclasses import dataclass
from enum import Enum


class CheckStatus(str, Enum):
    """Outcome of a single diagnostic check."""

    OK = "ok"
    WARNING = "warning"
    ERROR = "error"
    INFO = "info"


@dataclass
class DiagnosticCheck:
    """One line of a doctor report.

    ``required`` marks checks whose failure makes the environment unhealthy.
    Advisory checks may warn or fail without changing the verdict.
    """

    name: str
    status: CheckStatus
    message: str
    value: str | None = None
    required: bool = False

    def to_dict(self) -> dict[str, str]:
        """Convert to the machine output shape."""
        data = {
            "name": self.name,
            "status": self.status.value,
            "message": self.message,
        }
        if self.value is not None:
            data["value"] = self.value
        return data
