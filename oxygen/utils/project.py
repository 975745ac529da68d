"""Project directory inspection."""

import logging
import tomllib
from pathlib import Path
from typing import Any

from oxygen.exceptions import ManifestError

logger = logging.getLogger(__name__)

MANIFEST_NAME = "Cargo.toml"


def is_rust_project(cwd: Path) -> bool:
    """Check for a Cargo manifest in the directory."""
    return (cwd / MANIFEST_NAME).is_file()


def is_git_repo(cwd: Path) -> bool:
    """Check for git metadata in the directory."""
    return (cwd / ".git").exists()


def read_manifest(cwd: Path) -> dict[str, Any]:
    """Load the Cargo manifest.

    Raises:
        ManifestError: If the manifest cannot be read or is not valid TOML.
    """
    manifest_path = cwd / MANIFEST_NAME
    try:
        with manifest_path.open("rb") as f:
            return tomllib.load(f)
    except OSError as e:
        raise ManifestError(f"Failed to read {manifest_path}: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ManifestError(f"Failed to parse {manifest_path}: {e}") from e


def package_name(cwd: Path) -> str | None:
    """Return the package name from the manifest, if it can be found."""
    try:
        manifest = read_manifest(cwd)
    except ManifestError as e:
        logger.debug("No package name available: %s", e)
        return None
    package = manifest.get("package")
    if isinstance(package, dict) and isinstance(package.get("name"), str):
        return package["name"]
    return None
