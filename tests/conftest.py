"""
Shared test fixtures and configuration.
"""

from pathlib import Path

import pytest

from boxwine.adapters.mock import CommandCall, MockCommandRunner
from boxwine.core.models.config import BundleConfig


def _fake_tar(call: CommandCall) -> None:
    """Emulate what tar leaves on disk."""
    args = call.args
    if args[0] == "-xf":
        target = Path(args[args.index("-C") + 1])
        (target / "usr" / "bin").mkdir(parents=True)
        (target / "usr" / "bin" / "wine").write_text("#!/bin/sh\n")
    elif args[0] == "-czf":
        Path(args[1]).write_bytes(b"\x1f\x8b fake tarball")


def _fake_wineboot(call: CommandCall) -> None:
    prefix = Path(call.env["WINEPREFIX"])
    (prefix / "drive_c" / "windows" / "Installer").mkdir(parents=True)
    (prefix / "system.reg").write_text("WINE REGISTRY Version 2\n")


@pytest.fixture
def mock_runner() -> MockCommandRunner:
    """Mock runner whose tar and wineboot behave like the real tools."""
    runner = MockCommandRunner()
    runner.set_side_effect("tar", _fake_tar)
    runner.set_side_effect("wineboot", _fake_wineboot)
    return runner


@pytest.fixture
def fake_downloader():
    """Downloader that writes a placeholder archive instead of fetching."""
    urls: list[str] = []

    def _download(url: str, destination_dir: Path) -> Path:
        urls.append(url)
        path = destination_dir / url.rsplit("/", 1)[-1]
        path.write_bytes(b"archive")
        return path

    _download.urls = urls
    return _download


@pytest.fixture
def make_config():
    """Build a BundleConfig from keyword sections, like a loaded file."""

    def _make(**sections) -> BundleConfig:
        return BundleConfig.model_validate(sections)

    return _make
