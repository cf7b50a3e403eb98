"""
Command runner base — the contract between pipeline stages and tools.

Every stage that shells out (tar, wineboot, winetricks, wine) gets a
``CommandRunner`` injected and talks to the outside world only through
it. Tests substitute a ``MockCommandRunner`` without touching stage
logic.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence

from boxwine.core.models.command import CommandResult


class CommandRunner(ABC):
    """Abstract base class for command runners.

    Runners execute a program and return a CommandResult.
    They NEVER raise for a non-zero exit or a missing program; the
    exit code carries the outcome.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The runner identifier (e.g., 'shell', 'mock')."""

    @abstractmethod
    def execute(
        self,
        program: str,
        args: Sequence[str] = (),
        env: Mapping[str, str] | None = None,
        cwd: str | None = None,
    ) -> CommandResult:
        """Run ``program`` with ``args`` and block until it exits.

        Args:
            program: Program name (looked up on PATH) or a path to it.
            args: Arguments, passed verbatim.
            env: Variables overlaid on the current process environment.
            cwd: Working directory for the program.
        """

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
