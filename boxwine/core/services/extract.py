"""
Archive extractor — unpack the runtime tarball in place.

``tar`` is faster than any pure-Python extraction for archives this
size, so it is invoked through the command runner. The portable WineHQ
tarball unpacks to ``usr/``, which is renamed to ``wine/``.
"""

from __future__ import annotations

import logging
from pathlib import Path

from boxwine.adapters.base import CommandRunner
from boxwine.core.errors import ExtractError
from boxwine.core.services.layout import ARCHIVE_TOP_LEVEL, RUNTIME_DIR_NAME

logger = logging.getLogger(__name__)


def extract(
    archive_path: Path,
    target_dir: Path,
    runner: CommandRunner,
    top_level: str = ARCHIVE_TOP_LEVEL,
    runtime_name: str = RUNTIME_DIR_NAME,
) -> Path:
    """Unpack ``archive_path`` into ``target_dir`` and normalize its name.

    Steps: ``tar -xf``, delete the archive, rename ``top_level`` to
    ``runtime_name``.

    Returns:
        Path to the runtime directory.

    Raises:
        ExtractError: If tar fails, ``top_level`` is missing afterwards,
            or ``runtime_name`` already exists.
    """
    runtime_dir = target_dir / runtime_name
    if runtime_dir.exists():
        raise ExtractError(f"Runtime directory already exists: {runtime_dir}")

    logger.info("Extracting %s", archive_path.name)
    result = runner.execute("tar", ["-xf", str(archive_path), "-C", str(target_dir)])
    if not result.ok:
        raise ExtractError(
            f"Unable to extract {archive_path.name}",
            command=result.command,
            exit_code=result.exit_code,
            stderr=result.stderr,
        )

    try:
        archive_path.unlink()
    except OSError as e:
        raise ExtractError(f"Cannot remove {archive_path}: {e}") from e

    unpacked = target_dir / top_level
    if not unpacked.is_dir():
        raise ExtractError(
            f"Expected '{top_level}/' after extracting {archive_path.name}, not found"
        )

    # Checked again: the archive itself may have contained runtime_name
    if runtime_dir.exists():
        raise ExtractError(f"Runtime directory already exists: {runtime_dir}")

    try:
        unpacked.rename(runtime_dir)
    except OSError as e:
        raise ExtractError(f"Cannot rename {unpacked} to {runtime_dir}: {e}") from e

    logger.debug("Runtime unpacked to %s", runtime_dir)
    return runtime_dir
