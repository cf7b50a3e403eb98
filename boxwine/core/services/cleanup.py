"""
Installer cleanup — drop ``C:/windows/Installer`` to save space.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from boxwine.core.errors import BundleIOError
from boxwine.core.models.config import BundleConfig
from boxwine.core.paths import resolve_drive_path

logger = logging.getLogger(__name__)

INSTALLER_CACHE = "c:/windows/Installer"


def delete_installers(config: BundleConfig, prefix_dir: Path) -> bool:
    """Remove the Windows installer cache if configured.

    Returns:
        True if a directory was removed.
    """
    if not config.wine.prefix.delete_installers:
        return False

    target = resolve_drive_path(prefix_dir, INSTALLER_CACHE)
    if not target.is_dir():
        return False

    logger.info("Deleting %s", INSTALLER_CACHE)
    try:
        shutil.rmtree(target)
    except OSError as e:
        raise BundleIOError(f"Cannot delete {target}: {e}") from e
    return True
