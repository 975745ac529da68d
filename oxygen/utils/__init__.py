"""Utilities for Oxygen."""

from oxygen.utils.console import ColorfulFormatter, ConsoleHandler, configure_logging
from oxygen.utils.format import format_bytes, format_duration
from oxygen.utils.project import is_git_repo, is_rust_project, package_name, read_manifest

__all__ = [
    "ColorfulFormatter",
    "ConsoleHandler",
    "configure_logging",
    "format_bytes",
    "format_duration",
    "is_git_repo",
    "is_rust_project",
    "package_name",
    "read_manifest",
]
