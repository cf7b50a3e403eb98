"""
Logging setup — how build progress reaches the terminal.

The CLI configures the root logger once per invocation; stage modules
only ever call ``logging.getLogger(__name__)``. A quiet build prints
nothing but errors, ``-v`` shows one line per stage, ``--debug`` adds
every tool invocation.

When no flag is given, ``BOXWINE_LOG_LEVEL`` picks the level.
``BOXWINE_LOG_FILE`` tees the log to a file, at
``BOXWINE_LOG_FILE_LEVEL`` if set.
"""

from __future__ import annotations

import logging
import sys

_CLOCK = "%H:%M:%S"
_DETAILED = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d  %(message)s"

# Console format by threshold: stage lines at INFO, origin at DEBUG
_CONSOLE_FORMATS: tuple[tuple[int, str, str | None], ...] = (
    (logging.DEBUG, _DETAILED, _CLOCK),
    (logging.INFO, "%(asctime)s %(message)s", _CLOCK),
)


def _console_formatter(numeric_level: int) -> logging.Formatter:
    for threshold, fmt, datefmt in _CONSOLE_FORMATS:
        if numeric_level <= threshold:
            return logging.Formatter(fmt, datefmt=datefmt)
    return logging.Formatter("%(message)s")


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Install the console handler, plus a file handler when asked.

    Replaces any handlers already on the root logger, so calling it again
    reconfigures rather than duplicates output. The root level is the
    lower of the console and file levels.

    Args:
        level: Console level name; unknown names mean WARNING.
        log_file: Where to write the file log, if anywhere.
        log_file_level: File level name; defaults to ``level``.
    """
    console_level = _parse_level(level)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(_console_formatter(console_level))
    handlers: list[logging.Handler] = [console]

    if log_file:
        file_level = _parse_level(log_file_level or level)
        to_file = logging.FileHandler(log_file, encoding="utf-8")
        to_file.setLevel(file_level)
        to_file.setFormatter(logging.Formatter(_DETAILED, datefmt="%Y-%m-%d %H:%M:%S"))
        handlers.append(to_file)

    root = logging.getLogger()
    root.handlers.clear()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(min(h.level for h in handlers))


def resolve_level(
    verbose: bool = False,
    quiet: bool = False,
    debug: bool = False,
    env_level: str | None = None,
) -> str:
    """``--debug`` beats ``-v`` beats ``-q``; the env level applies only without flags."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    return env_level or "WARNING"


def _parse_level(level: str | None) -> int:
    if not level:
        return logging.WARNING
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        return logging.WARNING
    return numeric
