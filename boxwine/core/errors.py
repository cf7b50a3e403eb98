"""
Error types — one exception class per failure kind.

Every pipeline stage raises a subclass of ``BoxwineError``. The bundle
builder wraps the first failure in a ``StageError`` naming the stage,
and the CLI turns that into a single message and a non-zero exit.
"""

from __future__ import annotations


class BoxwineError(Exception):
    """Base class for all boxwine failures."""


class ConfigError(BoxwineError):
    """Raised when the bundle configuration is missing or invalid."""


class ValidationError(BoxwineError):
    """Raised when a build argument has the wrong shape (e.g. output path)."""


class BundleIOError(BoxwineError):
    """Raised when a directory or file cannot be created, copied or written."""


class DownloadError(BoxwineError):
    """Raised on transport failures and non-success HTTP statuses."""


class ToolError(BoxwineError):
    """Raised when an external tool exits non-zero.

    Attributes:
        command: The argv that was run.
        exit_code: The tool's exit status.
        stderr: Tail of the tool's stderr, if captured.
    """

    def __init__(
        self,
        message: str,
        command: list[str] | None = None,
        exit_code: int | None = None,
        stderr: str = "",
    ):
        detail = message
        if exit_code is not None:
            detail = f"{message} (exit {exit_code})"
        if stderr:
            detail = f"{detail}: {stderr}"
        super().__init__(detail)
        self.command = command or []
        self.exit_code = exit_code
        self.stderr = stderr


class ExtractError(ToolError):
    """Raised when the runtime archive cannot be unpacked."""


class InitError(ToolError):
    """Raised when the Wine prefix cannot be bootstrapped."""


class VerbError(ToolError):
    """Raised when winetricks fails."""


class RunError(ToolError):
    """Raised when a configured program fails inside the prefix."""


class CompressError(ToolError):
    """Raised when the prefix cannot be archived."""


class StageError(BoxwineError):
    """A stage failure, annotated with the stage that produced it."""

    def __init__(self, stage: str, cause: BaseException):
        super().__init__(f"{stage}: {cause}")
        self.stage = stage
        self.cause = cause
