"""Subcommand handlers.

Every handler takes a Dependencies container and returns a Report.
"""

from oxygen.commands.build import run_build
from oxygen.commands.check import run_check
from oxygen.commands.deps import run_deps
from oxygen.commands.doctor import run_doctor
from oxygen.commands.env import run_env
from oxygen.commands.gpg import run_gpg
from oxygen.commands.info import run_info
from oxygen.commands.init import run_init
from oxygen.commands.toolchain import run_toolchain
from oxygen.commands.tools import run_tools

__all__ = [
    "run_build",
    "run_check",
    "run_deps",
    "run_doctor",
    "run_env",
    "run_gpg",
    "run_info",
    "run_init",
    "run_toolchain",
    "run_tools",
]
