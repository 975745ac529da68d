"""Services for Oxygen."""

from oxygen.services.diagnostics import aggregate_health, overall_status
from oxygen.services.parsers import (
    first_line,
    parse_bloat_output,
    parse_dependency_tree,
    parse_host_target,
    parse_json_or_raw,
    parse_last_commit,
    parse_license_tree,
    parse_rustup_show,
    parse_toolchain_list,
)
from oxygen.services.runner import (
    ProcessRunner,
    is_missing_tool,
    run_command,
    run_command_with_timing,
)

__all__ = [
    "ProcessRunner",
    "aggregate_health",
    "first_line",
    "is_missing_tool",
    "overall_status",
    "parse_bloat_output",
    "parse_dependency_tree",
    "parse_host_target",
    "parse_json_or_raw",
    "parse_last_commit",
    "parse_license_tree",
    "parse_rustup_show",
    "parse_toolchain_list",
    "run_command",
    "run_command_with_timing",
]
