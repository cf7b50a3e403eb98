"""
Wine environment — variables passed to every Wine-facing tool.

wineboot, winetricks and wine itself all receive the prefix path and
the DLL overrides. Without the overrides Wine would offer to install
Mono and Gecko on first use.
"""

from __future__ import annotations

from pathlib import Path

from boxwine.core.models.config import BundleConfig

WINEPREFIX = "WINEPREFIX"
WINEDLLOVERRIDES = "WINEDLLOVERRIDES"
WINEARCH = "WINEARCH"
WINE = "WINE"


def wine_env(config: BundleConfig, prefix_dir: Path) -> dict[str, str]:
    """Environment overlay shared by wineboot, winetricks and wine."""
    return {
        WINEPREFIX: str(prefix_dir),
        WINEDLLOVERRIDES: config.dll_overrides,
    }
