"""
Tests for CLI commands — init, config check, create, and global options.
"""

import json
import textwrap
from pathlib import Path
from unittest.mock import patch

from click.testing import CliRunner

from boxwine.core.engine.builder import build as real_build
from boxwine.main import cli


def _write_config(tmp_path: Path) -> Path:
    content = textwrap.dedent("""\
        [app]
        name = "Test App"

        [wine.prefix]
        compress_wineprefix = false

        [winetricks]
        verbs = ["directshow"]
    """)
    path = tmp_path / "app.boxwine.toml"
    path.write_text(content)
    return path


class TestCLIGlobal:
    """Tests for global CLI behavior."""

    def test_help(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "Box up your Wine apps" in result.output
        assert "create" in result.output
        assert "init" in result.output

    def test_version(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output


class TestInitCommand:
    def test_writes_example(self, tmp_path: Path):
        target = tmp_path / "app.boxwine.toml"
        runner = CliRunner()
        result = runner.invoke(cli, ["init", "-f", str(target)])
        assert result.exit_code == 0
        assert "Wrote" in result.output
        assert "[winetricks]" in target.read_text()

    def test_refuses_overwrite(self, tmp_path: Path):
        target = tmp_path / "app.boxwine.toml"
        target.write_text("# mine\n")
        runner = CliRunner()
        result = runner.invoke(cli, ["init", "-f", str(target)])
        assert result.exit_code == 1
        assert "already exists" in result.output
        assert target.read_text() == "# mine\n"

    def test_force(self, tmp_path: Path):
        target = tmp_path / "app.boxwine.toml"
        target.write_text("# mine\n")
        runner = CliRunner()
        result = runner.invoke(cli, ["init", "-f", str(target), "--force"])
        assert result.exit_code == 0
        assert target.read_text() != "# mine\n"

    def test_yaml_example_validates(self, tmp_path: Path):
        target = tmp_path / "app.boxwine.yml"
        runner = CliRunner()
        assert runner.invoke(cli, ["init", "-f", str(target)]).exit_code == 0

        result = runner.invoke(cli, ["config", "check", "-f", str(target)])
        assert result.exit_code == 0
        assert "Configuration is valid" in result.output


class TestConfigCheck:
    def test_valid(self, tmp_path: Path):
        config = _write_config(tmp_path)
        runner = CliRunner()
        result = runner.invoke(cli, ["config", "check", "-f", str(config)])
        assert result.exit_code == 0
        assert "Test App" in result.output
        assert "portable-winehq-stable-5.0-osx64.tar.gz" in result.output
        assert "directshow" in result.output

    def test_invalid(self, tmp_path: Path):
        config = tmp_path / "app.boxwine.toml"
        config.write_text('[[wine.volume]]\nfrom = "/tmp/x"\nto = "/tmp/y"\n')
        runner = CliRunner()
        result = runner.invoke(cli, ["config", "check", "-f", str(config)])
        assert result.exit_code == 1
        assert "Configuration errors" in result.output

    def test_missing_file(self, tmp_path: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["config", "check", "-f", str(tmp_path / "nope.toml")])
        assert result.exit_code == 1
        assert "not found" in result.output


class TestCreateCommand:
    def test_bad_output_suffix(self, tmp_path: Path):
        config = _write_config(tmp_path)
        output = tmp_path / "My App"
        runner = CliRunner()
        result = runner.invoke(cli, ["create", "-f", str(config), "-o", str(output)])
        assert result.exit_code == 1
        assert "must end with" in result.output
        assert not output.exists()

    def test_error_as_json(self, tmp_path: Path):
        config = _write_config(tmp_path)
        runner = CliRunner()
        result = runner.invoke(
            cli, ["create", "-f", str(config), "-o", str(tmp_path / "x"), "--json"],
        )
        assert result.exit_code == 1
        assert "must end with" in json.loads(result.stdout)["error"]

    def test_missing_config(self, tmp_path: Path):
        runner = CliRunner()
        result = runner.invoke(
            cli, ["create", "-f", str(tmp_path / "nope.toml"), "-o", str(tmp_path / "A.app")],
        )
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_create(self, tmp_path: Path, mock_runner, fake_downloader):
        config = _write_config(tmp_path)
        output = tmp_path / "Test App.app"

        def _build(cfg, out):
            return real_build(cfg, out, runner=mock_runner, downloader=fake_downloader)

        runner = CliRunner()
        with patch("boxwine.core.engine.builder.build", side_effect=_build):
            result = runner.invoke(cli, ["create", "-f", str(config), "-o", str(output)])

        assert result.exit_code == 0, result.output
        assert "Created" in result.output
        assert "Test App" in result.output
        assert "compress" in result.output
        assert (output / "Contents" / "MacOS" / "wineprefix").is_dir()
        assert mock_runner.calls_to("winetricks")[0].args == ["directshow", "sandbox"]

    def test_create_json(self, tmp_path: Path, mock_runner, fake_downloader):
        config = _write_config(tmp_path)
        output = tmp_path / "Test App.app"

        def _build(cfg, out):
            return real_build(cfg, out, runner=mock_runner, downloader=fake_downloader)

        runner = CliRunner()
        with patch("boxwine.core.engine.builder.build", side_effect=_build):
            result = runner.invoke(
                cli, ["create", "-f", str(config), "-o", str(output), "--json"],
            )

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["status"] == "ok"
        assert data["output_path"] == str(output)

    def test_stage_failure(self, tmp_path: Path, mock_runner, fake_downloader):
        config = _write_config(tmp_path)
        mock_runner.set_failure("winetricks", stderr="Unknown arg directshow")

        def _build(cfg, out):
            return real_build(cfg, out, runner=mock_runner, downloader=fake_downloader)

        runner = CliRunner()
        with patch("boxwine.core.engine.builder.build", side_effect=_build):
            result = runner.invoke(
                cli, ["create", "-f", str(config), "-o", str(tmp_path / "A.app")],
            )

        assert result.exit_code == 1
        assert "verbs:" in result.output
        assert "Unknown arg directshow" in result.output
