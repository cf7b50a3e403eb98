"""
Bundle layout — where every part of a ``.app`` lives.

    My App.app/
      Contents/
        Info.plist
        MacOS/
          launch
          wine/          extracted runtime
          wineprefix/    Wine prefix (or wineprefix.tar.gz)
        Resources/
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

BUNDLE_SUFFIX = ".app"

# Directory the portable Wine tarball unpacks to, and what we rename it to
ARCHIVE_TOP_LEVEL = "usr"
RUNTIME_DIR_NAME = "wine"

PREFIX_DIR_NAME = "wineprefix"
LAUNCH_SCRIPT_NAME = "launch"
INFO_PLIST_NAME = "Info.plist"


@dataclass(frozen=True)
class BundleLayout:
    root: Path

    @property
    def contents_dir(self) -> Path:
        return self.root / "Contents"

    @property
    def macos_dir(self) -> Path:
        return self.contents_dir / "MacOS"

    @property
    def resources_dir(self) -> Path:
        return self.contents_dir / "Resources"

    @property
    def info_plist(self) -> Path:
        return self.contents_dir / INFO_PLIST_NAME

    @property
    def launch_script(self) -> Path:
        return self.macos_dir / LAUNCH_SCRIPT_NAME

    @property
    def runtime_dir(self) -> Path:
        return self.macos_dir / RUNTIME_DIR_NAME

    @property
    def prefix_dir(self) -> Path:
        return self.macos_dir / PREFIX_DIR_NAME


def wine_binary(runtime_dir: Path) -> Path:
    return runtime_dir / "bin" / "wine"


def wineboot_binary(runtime_dir: Path) -> Path:
    return runtime_dir / "bin" / "wineboot"
