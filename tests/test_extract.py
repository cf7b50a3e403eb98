"""
Tests for the archive extractor.
"""

import io
import shutil
import tarfile
from pathlib import Path

import pytest

from boxwine.adapters.mock import MockCommandRunner
from boxwine.adapters.shell.command import ShellCommandRunner
from boxwine.core.errors import ExtractError
from boxwine.core.services.extract import extract


def _make_runtime_tarball(path: Path, top_level: str = "usr") -> Path:
    with tarfile.open(path, "w:gz") as tf:
        data = b"#!/bin/sh\necho wine\n"
        info = tarfile.TarInfo(f"{top_level}/bin/wine")
        info.size = len(data)
        info.mode = 0o755
        tf.addfile(info, io.BytesIO(data))
    return path


class TestExtractWithMock:
    def test_renames_top_level(self, tmp_path: Path, mock_runner: MockCommandRunner):
        archive = tmp_path / "wine.tar.gz"
        archive.write_bytes(b"archive")

        runtime = extract(archive, tmp_path, mock_runner)

        assert runtime == tmp_path / "wine"
        assert (runtime / "bin" / "wine").is_file()
        assert not (tmp_path / "usr").exists()
        assert not archive.exists()
        call = mock_runner.calls_to("tar")[0]
        assert call.args == ["-xf", str(archive), "-C", str(tmp_path)]

    def test_tar_failure(self, tmp_path: Path):
        archive = tmp_path / "wine.tar.gz"
        archive.write_bytes(b"archive")
        runner = MockCommandRunner()
        runner.set_failure("tar", exit_code=2, stderr="not in gzip format")

        with pytest.raises(ExtractError, match="not in gzip format") as exc_info:
            extract(archive, tmp_path, runner)
        assert exc_info.value.exit_code == 2
        assert archive.exists()

    def test_missing_top_level(self, tmp_path: Path):
        archive = tmp_path / "wine.tar.gz"
        archive.write_bytes(b"archive")

        with pytest.raises(ExtractError, match="usr"):
            extract(archive, tmp_path, MockCommandRunner())

    def test_existing_runtime_dir(self, tmp_path: Path, mock_runner: MockCommandRunner):
        archive = tmp_path / "wine.tar.gz"
        archive.write_bytes(b"archive")
        (tmp_path / "wine").mkdir()

        with pytest.raises(ExtractError, match="already exists"):
            extract(archive, tmp_path, mock_runner)
        assert mock_runner.call_count == 0


@pytest.mark.skipif(shutil.which("tar") is None, reason="requires tar")
class TestExtractWithTar:
    def test_real_tarball(self, tmp_path: Path):
        archive = _make_runtime_tarball(tmp_path / "portable-winehq.tar.gz")

        runtime = extract(archive, tmp_path, ShellCommandRunner())

        assert (runtime / "bin" / "wine").read_text().startswith("#!/bin/sh")
        assert sorted(p.name for p in tmp_path.iterdir()) == ["wine"]

    def test_unexpected_layout(self, tmp_path: Path):
        archive = _make_runtime_tarball(tmp_path / "other.tar.gz", top_level="opt")

        with pytest.raises(ExtractError, match="Expected 'usr/'"):
            extract(archive, tmp_path, ShellCommandRunner())

    def test_archive_containing_runtime_name(self, tmp_path: Path):
        archive = tmp_path / "both.tar.gz"
        with tarfile.open(archive, "w:gz") as tf:
            for name in ("usr", "wine"):
                info = tarfile.TarInfo(name)
                info.type = tarfile.DIRTYPE
                info.mode = 0o755
                tf.addfile(info)

        with pytest.raises(ExtractError, match="already exists"):
            extract(archive, tmp_path, ShellCommandRunner())

    def test_corrupt_archive(self, tmp_path: Path):
        archive = tmp_path / "broken.tar.gz"
        archive.write_bytes(b"definitely not a tarball")

        with pytest.raises(ExtractError):
            extract(archive, tmp_path, ShellCommandRunner())
