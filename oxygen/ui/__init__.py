"""Output rendering for Oxygen."""

from oxygen.ui.icons import GLYPHS, Status, icon, to_status
from oxygen.ui.report import Report, emit, failure

__all__ = [
    "GLYPHS",
    "Report",
    "Status",
    "emit",
    "failure",
    "icon",
    "to_status",
]
