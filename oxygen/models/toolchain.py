"""Toolchain and tool inventory data models."""

from dataclasses import dataclass


@dataclass
class ToolchainEntry:
    """An installed toolchain from ``rustup toolchain list``."""

    name: str
    is_default: bool = False
    status: str = "installed"

    def to_dict(self) -> dict[str, str | bool]:
        """Convert to the machine output shape."""
        return {"name": self.name, "is_default": self.is_default, "status": self.status}


@dataclass
class ToolStatus:
    """Availability of a development tool."""

    name: str
    available: bool
    version: str | None = None

    def to_dict(self) -> dict[str, str]:
        """Convert to the machine output shape."""
        if self.available:
            return {
                "name": self.name,
                "version": self.version or "unknown version",
                "status": "available",
            }
        return {"name": self.name, "status": "not_found"}
