"""
Bundle files — Info.plist, the launch script, and bundled assets.

The launch script locates the prefix relative to itself, so the
prefix directory name must be final before it is written.
"""

from __future__ import annotations

import logging
import plistlib
import shlex
import shutil
from pathlib import Path

from boxwine.core.errors import BundleIOError
from boxwine.core.models.config import BundleConfig, RunSpec
from boxwine.core.paths import PREFIX_VARIABLE, is_drive_path, normalize_windows_path
from boxwine.core.services.compress import ARCHIVE_SUFFIX
from boxwine.core.services.layout import (
    INFO_PLIST_NAME,
    LAUNCH_SCRIPT_NAME,
    RUNTIME_DIR_NAME,
)
from boxwine.core.services.verbs import WINETRICKS

logger = logging.getLogger(__name__)

# Started when the config names no entrypoint
DEFAULT_ENTRYPOINT = "C:/windows/system32/cmd.exe"

_LAUNCH_TEMPLATE = """\
#!/bin/sh
# Generated by boxwine.

DIR="$(cd "$(dirname "$0")" >/dev/null 2>&1 && pwd)"

WINEPREFIX="${{DIR}}/{prefix_name}"

if test -f "${{WINEPREFIX}}{archive_suffix}"; then
    echo "Uncompressing wineprefix ..."
    mkdir -p "${{WINEPREFIX}}"
    tar -xzf "${{WINEPREFIX}}{archive_suffix}" -C "${{WINEPREFIX}}" || exit 1
    rm "${{WINEPREFIX}}{archive_suffix}"
    echo "Done!"
fi

WINE="${{DIR}}/{runtime_name}/bin/wine"

export WINEPREFIX
export WINEDLLOVERRIDES={dll_overrides}

exec "${{WINE}}" start /wait {target}
"""


def info_plist_data(config: BundleConfig) -> dict[str, str]:
    icon_name = Path(config.app.icon).name if config.app.icon else ""
    return {
        "CFBundleName": config.app.name,
        "CFBundleDisplayName": config.app.name,
        "CFBundleExecutable": LAUNCH_SCRIPT_NAME,
        "CFBundlePackageType": "APPL",
        "CFBundleIconFile": icon_name,
    }


def write_info_plist(config: BundleConfig, contents_dir: Path) -> Path:
    """Write ``Info.plist`` into the bundle's Contents directory."""
    path = contents_dir / INFO_PLIST_NAME
    try:
        with open(path, "wb") as f:
            plistlib.dump(info_plist_data(config), f)
    except OSError as e:
        raise BundleIOError(f"Cannot write {path}: {e}") from e
    return path


def _launch_target(entrypoint: RunSpec) -> str:
    """Shell words for the program ``wine start`` should open."""
    program = entrypoint.program or DEFAULT_ENTRYPOINT
    args = " ".join(shlex.quote(a) for a in entrypoint.arguments)

    if is_drive_path(program):
        words = shlex.quote(normalize_windows_path(program))
    elif program.startswith(PREFIX_VARIABLE):
        rest = program[len(PREFIX_VARIABLE):]
        words = '/unix "${WINEPREFIX}"' + (shlex.quote(rest) if rest else "")
    else:
        words = "/unix " + shlex.quote(program)

    return f"{words} {args}" if args else words


def render_launch_script(config: BundleConfig, prefix_name: str) -> str:
    return _LAUNCH_TEMPLATE.format(
        prefix_name=prefix_name,
        archive_suffix=ARCHIVE_SUFFIX,
        runtime_name=RUNTIME_DIR_NAME,
        dll_overrides=shlex.quote(config.dll_overrides),
        target=_launch_target(config.app.entrypoint),
    )


def write_launch_script(config: BundleConfig, prefix_name: str, macos_dir: Path) -> Path:
    """Write the executable ``launch`` script into ``Contents/MacOS``.

    Args:
        config: Bundle configuration.
        prefix_name: Prefix directory name, relative to the script.
        macos_dir: The bundle's ``Contents/MacOS`` directory.
    """
    path = macos_dir / LAUNCH_SCRIPT_NAME
    try:
        path.write_text(render_launch_script(config, prefix_name), encoding="utf-8")
        path.chmod(0o755)
    except OSError as e:
        raise BundleIOError(f"Cannot write {path}: {e}") from e
    return path


def copy_icon(config: BundleConfig, resources_dir: Path) -> Path | None:
    """Copy the app icon into ``Contents/Resources``, if one is set."""
    if not config.app.icon:
        return None

    source = Path(config.app.icon).expanduser()
    if not source.is_file():
        raise BundleIOError(f"Icon not found: {source}")

    dest = resources_dir / source.name
    try:
        shutil.copy2(source, dest)
    except OSError as e:
        raise BundleIOError(f"Cannot copy icon {source}: {e}") from e
    return dest


def bundle_winetricks(config: BundleConfig, macos_dir: Path) -> Path | None:
    """Copy the host's winetricks into the bundle when requested."""
    if not config.winetricks.bundle:
        return None

    found = shutil.which(WINETRICKS)
    if found is None:
        raise BundleIOError("winetricks.bundle is set but winetricks is not on PATH")

    dest = macos_dir / WINETRICKS
    try:
        shutil.copy2(found, dest)
        dest.chmod(0o755)
    except OSError as e:
        raise BundleIOError(f"Cannot bundle winetricks: {e}") from e
    return dest
