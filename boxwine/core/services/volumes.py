"""
Volume copier — copy configured files and folders into the prefix.

Runs twice: the pre-install phase copies volumes before any program
runs, the post-install phase copies ``post_install`` volumes after.
Copies overwrite; when two volumes target the same path the later one
wins.
"""

from __future__ import annotations

import enum
import logging
import shutil
from pathlib import Path

from boxwine.core.errors import BundleIOError, ConfigError
from boxwine.core.models.config import BundleConfig, Volume
from boxwine.core.paths import is_drive_path, resolve_drive_path, resolve_source_path

logger = logging.getLogger(__name__)


class CopyPhase(enum.Enum):
    PRE = "pre"
    POST = "post"


def volumes_for_phase(config: BundleConfig, phase: CopyPhase) -> list[Volume]:
    if phase is CopyPhase.POST:
        return config.post_install_volumes()
    return config.pre_install_volumes()


def copy_volumes(config: BundleConfig, prefix_dir: Path, phase: CopyPhase) -> None:
    """Copy every volume belonging to ``phase`` into the prefix.

    Raises:
        ConfigError: If a volume destination is not a ``c:`` path.
        BundleIOError: If a source is missing or a copy fails.
    """
    for volume in volumes_for_phase(config, phase):
        copy_volume(volume, prefix_dir)


def copy_volume(volume: Volume, prefix_dir: Path) -> Path:
    """Copy one volume, returning its destination path."""
    if not is_drive_path(volume.to):
        raise ConfigError(f"Volume destination must begin with 'c:': {volume.to}")

    try:
        source = resolve_source_path(prefix_dir, volume.source)
        dest = resolve_drive_path(prefix_dir, volume.to)
    except ValueError as e:
        raise ConfigError(str(e)) from e

    if not source.exists():
        raise BundleIOError(f"Volume source not found: {source}")

    logger.info("Copying %s → %s", volume.source, volume.to)
    try:
        dest.parent.mkdir(parents=True, exist_ok=True)
        if source.is_dir():
            shutil.copytree(source, dest, symlinks=True, dirs_exist_ok=True)
        else:
            shutil.copy2(source, dest)
    except (OSError, shutil.Error) as e:
        raise BundleIOError(f"Cannot copy {source} to {dest}: {e}") from e
    return dest
