"""
Shell command runner — execute external programs.

This is the SINGLE PLACE where ``subprocess.run`` is called. Program
lookup, environment overlay, output capture and timing all happen
here.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import time
from collections.abc import Mapping, Sequence
from pathlib import Path

from boxwine.adapters.base import CommandRunner
from boxwine.core.models.command import EXIT_NOT_FOUND, CommandResult

logger = logging.getLogger(__name__)

# Keep this much of stdout/stderr on the result
_OUTPUT_TAIL = 2000


class ShellCommandRunner(CommandRunner):
    """Run programs with ``subprocess.run`` and capture their output.

    No timeout is applied by default: installers run by the pipeline
    may legitimately take a long time.
    """

    def __init__(self, timeout: float | None = None):
        self._timeout = timeout

    @property
    def name(self) -> str:
        return "shell"

    def execute(
        self,
        program: str,
        args: Sequence[str] = (),
        env: Mapping[str, str] | None = None,
        cwd: str | None = None,
    ) -> CommandResult:
        command = [program, *args]

        resolved = _resolve_program(program)
        if resolved is None:
            logger.debug("Program not found: %s", program)
            return CommandResult.failure(
                command=command,
                exit_code=EXIT_NOT_FOUND,
                stderr=f"Program not found: {program}",
            )

        # ── Environment ──
        full_env = os.environ.copy()
        if env:
            full_env.update(env)

        logger.debug("Executing: %s (cwd=%s, env=%s)", command, cwd, dict(env or {}))
        start = time.monotonic()

        try:
            result = subprocess.run(
                [resolved, *args],
                capture_output=True,
                text=True,
                errors="replace",
                env=full_env,
                cwd=cwd,
                timeout=self._timeout,
            )
        except subprocess.TimeoutExpired:
            return CommandResult.failure(
                command=command,
                stderr=f"Command timed out after {self._timeout}s",
                metadata={"timeout": self._timeout},
            )
        except OSError as e:
            return CommandResult.failure(
                command=command,
                stderr=f"Command execution error: {e}",
            )

        elapsed_ms = int((time.monotonic() - start) * 1000)
        stdout = (result.stdout or "")[-_OUTPUT_TAIL:].strip()
        stderr = (result.stderr or "")[-_OUTPUT_TAIL:].strip()

        if result.returncode == 0:
            return CommandResult.success(
                command=command,
                stdout=stdout,
                stderr=stderr,
                duration_ms=elapsed_ms,
            )
        return CommandResult.failure(
            command=command,
            exit_code=result.returncode,
            stdout=stdout,
            stderr=stderr,
            duration_ms=elapsed_ms,
        )


def _resolve_program(program: str) -> str | None:
    """Find an executable by path or on PATH."""
    if os.sep in program:
        path = Path(program)
        if path.is_file() and os.access(path, os.X_OK):
            return str(path)
        return None
    return shutil.which(program)
