"""Status glyphs shared by every subcommand."""

from enum import Enum


class Status(str, Enum):
    """Display status of a result line."""

    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"
    INFO = "info"
    UNKNOWN = "unknown"


GLYPHS = {
    Status.SUCCESS: "✅",
    Status.WARNING: "⚠️ ",
    Status.ERROR: "❌",
    Status.INFO: "ℹ️ ",
    Status.UNKNOWN: "❓",
}

# check and step statuses that are spelled differently
ALIASES = {
    "ok": Status.SUCCESS,
    "available": Status.SUCCESS,
    "not_found": Status.ERROR,
}


def to_status(value: str | Enum) -> Status:
    """Map a check, step or plain status string onto the display enum."""
    raw = value.value if isinstance(value, Enum) else value
    if raw in ALIASES:
        return ALIASES[raw]
    try:
        return Status(raw)
    except ValueError:
        return Status.UNKNOWN


def icon(value: str | Enum) -> str:
    """Return the glyph for a status."""
    return GLYPHS[to_status(value)]
