"""Data models for Oxygen."""

from oxygen.models.actions import DepsAction, GpgAction, ToolchainAction
from oxygen.models.command import CommandResult
from oxygen.models.deps import DependencyRecord, LicenseSummary, SizeEntry
from oxygen.models.diagnostics import CheckStatus, DiagnosticCheck
from oxygen.models.signing import SetupStep
from oxygen.models.toolchain import ToolchainEntry, ToolStatus

__all__ = [
    "CheckStatus",
    "CommandResult",
    "DependencyRecord",
    "DepsAction",
    "DiagnosticCheck",
    "GpgAction",
    "LicenseSummary",
    "SetupStep",
    "SizeEntry",
    "ToolchainAction",
    "ToolchainEntry",
    "ToolStatus",
]
