"""
Compressor — archive the finished prefix to shrink the bundle.

The launch script unpacks ``wineprefix.tar.gz`` on first run.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from boxwine.adapters.base import CommandRunner
from boxwine.core.errors import BundleIOError, CompressError
from boxwine.core.models.config import BundleConfig

logger = logging.getLogger(__name__)

ARCHIVE_SUFFIX = ".tar.gz"


def archive_path(prefix_dir: Path) -> Path:
    return prefix_dir.with_name(prefix_dir.name + ARCHIVE_SUFFIX)


def maybe_compress(
    config: BundleConfig,
    prefix_dir: Path,
    runner: CommandRunner,
) -> Path | None:
    """Replace the prefix directory with a tarball next to it.

    Returns:
        The archive path, or None when compression is disabled.

    Raises:
        CompressError: If tar exits non-zero.
        BundleIOError: If the uncompressed prefix cannot be removed.
    """
    if not config.compress_prefix:
        return None

    archive = archive_path(prefix_dir)
    logger.info("Compressing wineprefix")
    result = runner.execute(
        "tar", ["-czf", str(archive), "-C", str(prefix_dir), "."],
    )
    if not result.ok:
        raise CompressError(
            "Unable to compress wineprefix",
            command=result.command,
            exit_code=result.exit_code,
            stderr=result.stderr,
        )

    try:
        shutil.rmtree(prefix_dir)
    except OSError as e:
        raise BundleIOError(f"Cannot remove {prefix_dir}: {e}") from e
    return archive
