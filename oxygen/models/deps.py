"""Dependency analysis data models."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class DependencyRecord:
    """A package line from ``cargo tree``.

    ``name`` holds the "name version" pair. The same package can appear at
    several depths in one tree.
    """

    name: str
    depth: int = 0
    features: str | None = None
    license: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to the machine output shape."""
        data: dict[str, Any] = {"name": self.name, "depth": self.depth}
        if self.features is not None:
            data["features"] = self.features
        if self.license is not None:
            data["license"] = self.license
        return data


@dataclass
class LicenseSummary:
    """Dependencies with a known license and a tally per license."""

    dependencies: list[DependencyRecord] = field(default_factory=list)
    counts: dict[str, int] = field(default_factory=dict)


@dataclass
class SizeEntry:
    """One crate row of a ``cargo bloat --crates`` breakdown."""

    percentage: str
    size: str
    crate: str

    def to_dict(self) -> dict[str, str]:
        """Convert to the machine output shape."""
        return {"percentage": self.percentage, "size": self.size, "crate": self.crate}
