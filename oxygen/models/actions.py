"""Sub-actions of the toolchain, deps and gpg commands.

Each set is declared once here and shared by the CLI and the handlers.
"""

from enum import Enum


class ToolchainAction(str, Enum):
    """Toolchain management actions."""

    LIST = "list"
    INSTALL = "install"
    DEFAULT = "default"
    SHOW = "show"
    REMOVE = "remove"


class DepsAction(str, Enum):
    """Dependency analysis actions."""

    TREE = "tree"
    OUTDATED = "outdated"
    AUDIT = "audit"
    LICENSES = "licenses"
    SIZE = "size"


class GpgAction(str, Enum):
    """Signing actions."""

    SIGN = "sign"
    VERIFY = "verify"
    SETUP = "setup"
