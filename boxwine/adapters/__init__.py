"""Adapters — bindings for the external programs the pipeline drives.

Public re-exports for convenient access.
"""

from boxwine.adapters.base import CommandRunner
from boxwine.adapters.mock import MockCommandRunner
from boxwine.adapters.shell.command import ShellCommandRunner

__all__ = [
    "CommandRunner",
    "MockCommandRunner",
    "ShellCommandRunner",
]
