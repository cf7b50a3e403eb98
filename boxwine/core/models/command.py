"""
Command result model — the runner's output contract.

A command runner executes an external program and returns a
``CommandResult``. It never raises for a non-zero exit: the stage
that called it decides which error that is.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

# Shell convention for "command not found"
EXIT_NOT_FOUND = 127


class CommandResult(BaseModel):
    """Outcome of one external program invocation."""

    command: list[str] = Field(default_factory=list)
    exit_code: int = 0
    duration_ms: int = 0

    stdout: str = ""
    stderr: str = ""

    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        """Whether the program exited with status 0."""
        return self.exit_code == 0

    @property
    def failed(self) -> bool:
        return not self.ok

    @classmethod
    def success(
        cls,
        command: list[str],
        stdout: str = "",
        **kwargs: Any,
    ) -> CommandResult:
        """Create a success result."""
        return cls(command=command, exit_code=0, stdout=stdout, **kwargs)

    @classmethod
    def failure(
        cls,
        command: list[str],
        exit_code: int = 1,
        stderr: str = "",
        **kwargs: Any,
    ) -> CommandResult:
        """Create a failure result."""
        if exit_code == 0:
            raise ValueError("a failure result needs a non-zero exit code")
        return cls(command=command, exit_code=exit_code, stderr=stderr, **kwargs)
