"""
Prefix initializer — produce a ready-to-use Wine prefix.

Either copies an existing prefix from the host (``base_prefix``) or
bootstraps a fresh one with the bundled ``wineboot``.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from boxwine.adapters.base import CommandRunner
from boxwine.core.errors import BundleIOError, InitError
from boxwine.core.models.config import BundleConfig
from boxwine.core.services.layout import PREFIX_DIR_NAME, wineboot_binary
from boxwine.core.services.wine_env import WINEARCH, wine_env

logger = logging.getLogger(__name__)


def prefix_path(bundle_macos_dir: Path) -> Path:
    """Where the prefix lives inside the bundle."""
    return bundle_macos_dir / PREFIX_DIR_NAME


def initialize(
    config: BundleConfig,
    runtime_dir: Path,
    bundle_macos_dir: Path,
    runner: CommandRunner,
) -> Path:
    """Create the Wine prefix inside the bundle.

    Args:
        config: Bundle configuration.
        runtime_dir: Extracted Wine runtime.
        bundle_macos_dir: The bundle's ``Contents/MacOS`` directory.
        runner: Command runner for ``wineboot``.

    Returns:
        Path to the prefix directory.

    Raises:
        BundleIOError: If the base prefix is missing or cannot be copied.
        InitError: If ``wineboot`` exits non-zero.
    """
    prefix_dir = prefix_path(bundle_macos_dir)

    if config.base_prefix:
        _copy_base_prefix(Path(config.base_prefix).expanduser(), prefix_dir)
        return prefix_dir

    env = wine_env(config, prefix_dir)
    env[WINEARCH] = config.wine.prefix.prefix_arch

    logger.info("Creating wineprefix (%s)", config.wine.prefix.prefix_arch)
    result = runner.execute(str(wineboot_binary(runtime_dir)), ["--init"], env=env)
    if not result.ok:
        raise InitError(
            "wineboot failed",
            command=result.command,
            exit_code=result.exit_code,
            stderr=result.stderr,
        )
    return prefix_dir


def _copy_base_prefix(source: Path, prefix_dir: Path) -> None:
    if not source.is_dir():
        raise BundleIOError(f"Base prefix not found: {source}")

    logger.info("Copying base prefix %s", source)
    try:
        shutil.copytree(source, prefix_dir, symlinks=True)
    except (OSError, shutil.Error) as e:
        raise BundleIOError(f"Cannot copy base prefix {source}: {e}") from e
