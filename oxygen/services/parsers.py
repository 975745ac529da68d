"""Parsers for the text output of wrapped tools.

Each parser takes raw text and returns structured records. None of them
raise on unexpected input: lines that do not fit are skipped, and callers
always keep the raw text alongside the structured view.
"""

import json
from typing import Any

from oxygen.models import DependencyRecord, LicenseSummary, SizeEntry, ToolchainEntry

# cargo tree draws its hierarchy with these before each package
TREE_PREFIX_CHARS = " \t│├└─"
INDENT_WIDTH = 4

SIZE_UNITS = ("B", "KB", "MB", "GB", "KiB", "MiB", "GiB")


def first_line(text: str, default: str = "") -> str:
    """Return the first line of text, stripped."""
    for line in text.splitlines():
        return line.strip()
    return default


def _split_package(line: str) -> tuple[str, str | None]:
    """Split "name version payload..." after the version token."""
    parts = line.split(" ", 2)
    if len(parts) < 3:
        return line, None
    payload = parts[2].strip()
    return f"{parts[0]} {parts[1]}", payload or None


def _tree_depth(line: str) -> tuple[int, str]:
    """Return the nesting depth of a tree line and the line without its prefix."""
    body = line.lstrip(TREE_PREFIX_CHARS)
    return (len(line) - len(body)) // INDENT_WIDTH, body.rstrip()


def parse_dependency_tree(tree_output: str) -> list[DependencyRecord]:
    """Parse ``cargo tree --format "{p} {f}"`` output.

    Args:
        tree_output: Raw stdout of cargo tree.

    Returns:
        One record per non-blank line. Depth is the indentation width
        divided by 4; anything after "name version" is kept verbatim as
        the feature payload.
    """
    dependencies = []
    for line in tree_output.splitlines():
        if not line.strip():
            continue
        depth, body = _tree_depth(line)
        name, features = _split_package(body)
        dependencies.append(DependencyRecord(name=name, depth=depth, features=features))
    return dependencies


def parse_license_tree(tree_output: str) -> LicenseSummary:
    """Parse ``cargo tree --format "{p} {l}"`` output into a license tally.

    Packages without a license, or with ``N/A``, are left out.
    """
    summary = LicenseSummary()
    for line in tree_output.splitlines():
        if not line.strip():
            continue
        depth, body = _tree_depth(line)
        name, license_name = _split_package(body)
        if not license_name or license_name == "N/A":
            continue
        summary.dependencies.append(
            DependencyRecord(name=name, depth=depth, license=license_name)
        )
        summary.counts[license_name] = summary.counts.get(license_name, 0) + 1
    return summary


def _is_size(token: str) -> bool:
    return token[:1].isdigit() and token.endswith(SIZE_UNITS)


def parse_bloat_output(bloat_output: str) -> list[SizeEntry]:
    """Parse ``cargo bloat --crates`` rows.

    A row starts with a percentage and has a size column; the crate name
    follows the first size token. Header, summary and note lines fail the
    heuristic and are dropped.
    """
    analysis = []
    for line in bloat_output.splitlines():
        if "%" not in line:
            continue
        parts = line.split()
        size_index = next((i for i, part in enumerate(parts) if _is_size(part)), None)
        if not size_index or size_index == len(parts) - 1:
            continue
        crate = " ".join(parts[size_index + 1:])
        # the ".text section size" summary row
        if crate.startswith("."):
            continue
        analysis.append(SizeEntry(percentage=parts[0], size=parts[size_index], crate=crate))
    return analysis


def parse_json_or_raw(output: str) -> dict[str, Any]:
    """Parse a tool's JSON output, falling back to the raw text.

    Returns:
        ``{"data": parsed}`` for valid JSON, otherwise
        ``{"raw_output": text}``.
    """
    try:
        return {"data": json.loads(output)}
    except (json.JSONDecodeError, ValueError):
        return {"raw_output": output.strip()}


def parse_toolchain_list(toolchain_output: str) -> list[ToolchainEntry]:
    """Parse ``rustup toolchain list`` output.

    Handles both ``stable-x86_64 (default)`` and the newer
    ``stable-x86_64 (active, default)`` markers.
    """
    toolchains = []
    for line in toolchain_output.splitlines():
        line = line.strip()
        if not line:
            continue
        name = line
        is_default = False
        if line.endswith(")") and " (" in line:
            name, markers = line.rsplit(" (", 1)
            flags = {flag.strip() for flag in markers.rstrip(")").split(",")}
            is_default = "default" in flags
            name = name.strip()
        toolchains.append(ToolchainEntry(name=name, is_default=is_default))
    return toolchains


def parse_rustup_show(show_output: str) -> tuple[str | None, list[str]]:
    """Extract the active and installed toolchains from ``rustup show``.

    Returns:
        Tuple of (active toolchain line or None, installed toolchain lines).
    """
    lines = show_output.splitlines()

    active = None
    for index, line in enumerate(lines):
        if "active toolchain" not in line:
            continue
        active = line.strip()
        # newer rustup prints a section header with the toolchain below it
        if active == "active toolchain":
            active = next(
                (
                    following.strip()
                    for following in lines[index + 1:]
                    if following.strip() and set(following.strip()) != {"-"}
                ),
                None,
            )
        break

    installed: list[str] = []
    in_section = False
    for line in lines:
        if not in_section:
            in_section = "installed toolchains" in line
            continue
        stripped = line.strip()
        if not stripped and installed:
            break
        if "active toolchain" in line:
            break
        if not stripped or set(stripped) == {"-"}:
            continue
        installed.append(stripped)

    return active, installed


def parse_host_target(version_output: str) -> str | None:
    """Return the host triple from ``rustc -vV`` output."""
    for line in version_output.splitlines():
        if line.startswith("host:"):
            return line[len("host:"):].strip()
    return None


def parse_last_commit(log_output: str) -> dict[str, str] | None:
    """Parse ``git log -1 --pretty=format:%H|%s|%an|%ad`` output."""
    parts = log_output.strip().split("|")
    if len(parts) < 4:
        return None
    # the subject is the only field that can contain the separator
    return {
        "hash": parts[0],
        "message": "|".join(parts[1:-2]),
        "author": parts[-2],
        "date": parts[-1],
    }
