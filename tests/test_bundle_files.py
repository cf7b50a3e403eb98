"""
Tests for bundle metadata: Info.plist, launch script, icon, winetricks.
"""

import os
import plistlib
import stat
from pathlib import Path

import pytest

from boxwine.core.errors import BundleIOError
from boxwine.core.services.bundle_files import (
    bundle_winetricks,
    copy_icon,
    info_plist_data,
    render_launch_script,
    write_info_plist,
    write_launch_script,
)


class TestInfoPlist:
    def test_keys(self, make_config):
        data = info_plist_data(make_config(app={"name": "Half-Life"}))
        assert data == {
            "CFBundleName": "Half-Life",
            "CFBundleDisplayName": "Half-Life",
            "CFBundleExecutable": "launch",
            "CFBundlePackageType": "APPL",
            "CFBundleIconFile": "",
        }

    def test_icon_basename(self, make_config):
        data = info_plist_data(make_config(app={"icon": "~/icons/game.icns"}))
        assert data["CFBundleIconFile"] == "game.icns"

    def test_written_file_parses(self, make_config, tmp_path: Path):
        path = write_info_plist(make_config(app={"name": "Game"}), tmp_path)

        assert path == tmp_path / "Info.plist"
        with open(path, "rb") as f:
            loaded = plistlib.load(f)
        assert loaded["CFBundleName"] == "Game"
        assert loaded["CFBundleExecutable"] == "launch"


class TestLaunchScript:
    def test_default_entrypoint(self, make_config):
        script = render_launch_script(make_config(), "wineprefix")

        assert script.startswith("#!/bin/sh\n")
        assert 'WINEPREFIX="${DIR}/wineprefix"' in script
        assert 'WINE="${DIR}/wine/bin/wine"' in script
        assert "export WINEDLLOVERRIDES=mscoree,mshtml=" in script
        assert script.rstrip().endswith(
            'exec "${WINE}" start /wait C:/windows/system32/cmd.exe'
        )

    def test_uncompresses_prefix_on_first_run(self, make_config):
        script = render_launch_script(make_config(), "wineprefix")
        assert 'if test -f "${WINEPREFIX}.tar.gz"; then' in script
        assert 'tar -xzf "${WINEPREFIX}.tar.gz" -C "${WINEPREFIX}"' in script

    def test_drive_entrypoint_with_args(self, make_config):
        config = make_config(app={"entrypoint": {
            "program": "C:\\Program Files\\App\\app.exe",
            "args": ["--some-arg", "true"],
        }})

        script = render_launch_script(config, "wineprefix")

        assert (
            "start /wait 'C:/Program Files/App/app.exe' --some-arg true" in script
        )

    def test_prefix_relative_entrypoint(self, make_config):
        config = make_config(app={"entrypoint": {"program": "$WINEPREFIX/drive_c/game.exe"}})

        script = render_launch_script(config, "wineprefix")

        assert 'start /wait /unix "${WINEPREFIX}"/drive_c/game.exe' in script

    def test_host_entrypoint(self, make_config):
        config = make_config(app={"entrypoint": {"program": "/Applications/Tool/tool.exe"}})

        script = render_launch_script(config, "wineprefix")

        assert "start /wait /unix /Applications/Tool/tool.exe" in script

    def test_dll_overrides_follow_config(self, make_config):
        config = make_config(wine={"prefix": {"install_mono": True, "install_gecko": True}})
        assert "export WINEDLLOVERRIDES==\n" in render_launch_script(config, "wineprefix")

    def test_executable(self, make_config, tmp_path: Path):
        path = write_launch_script(make_config(), "wineprefix", tmp_path)

        assert path == tmp_path / "launch"
        assert stat.S_IMODE(path.stat().st_mode) == 0o755


class TestIcon:
    def test_copied(self, make_config, tmp_path: Path):
        icon = tmp_path / "game.icns"
        icon.write_bytes(b"icns")
        resources = tmp_path / "Resources"
        resources.mkdir()

        dest = copy_icon(make_config(app={"icon": str(icon)}), resources)

        assert dest == resources / "game.icns"
        assert dest.read_bytes() == b"icns"

    def test_no_icon(self, make_config, tmp_path: Path):
        assert copy_icon(make_config(), tmp_path) is None

    def test_missing_icon(self, make_config, tmp_path: Path):
        config = make_config(app={"icon": str(tmp_path / "missing.icns")})
        with pytest.raises(BundleIOError, match="Icon not found"):
            copy_icon(config, tmp_path)


class TestBundleWinetricks:
    def test_not_requested(self, make_config, tmp_path: Path):
        assert bundle_winetricks(make_config(), tmp_path) is None
        assert list(tmp_path.iterdir()) == []

    def test_copied_from_path(self, make_config, tmp_path: Path, monkeypatch):
        bin_dir = tmp_path / "bin"
        bin_dir.mkdir()
        script = bin_dir / "winetricks"
        script.write_text("#!/bin/sh\n")
        script.chmod(0o755)
        monkeypatch.setenv("PATH", str(bin_dir))
        macos = tmp_path / "MacOS"
        macos.mkdir()

        dest = bundle_winetricks(make_config(winetricks={"bundle": True}), macos)

        assert dest == macos / "winetricks"
        assert os.access(dest, os.X_OK)

    def test_missing_on_path(self, make_config, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("PATH", str(tmp_path / "empty"))

        with pytest.raises(BundleIOError, match="not on PATH"):
            bundle_winetricks(make_config(winetricks={"bundle": True}), tmp_path)
