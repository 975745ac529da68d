"""Signing setup data models."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class SetupStep:
    """One check of the signing setup flow."""

    step: str
    status: str
    message: str
    suggestion: str | None = None
    details: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the machine output shape."""
        data: dict[str, Any] = {
            "step": self.step,
            "status": self.status,
            "message": self.message,
        }
        if self.suggestion is not None:
            data["suggestion"] = self.suggestion
        if self.details is not None:
            data["details"] = self.details
        data.update(self.extra)
        return data
