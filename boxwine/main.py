"""
boxwine — CLI entrypoint.

Usage:
    boxwine --help
    boxwine init
    boxwine create -f app.boxwine.toml -o "My App.app"
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from boxwine import __version__
from boxwine.core.observability.logging_config import resolve_level, setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="boxwine")
@click.option("--verbose", "-v", is_flag=True, help="Show build progress.")
@click.option("--quiet", "-q", is_flag=True, help="Only show errors.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, quiet: bool, debug: bool) -> None:
    """Box up your Wine apps and turn them into Mac apps."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet

    # ── Logging setup (once, at process start) ──────────────────
    setup_logging(
        level=resolve_level(
            verbose=verbose,
            quiet=quiet,
            debug=debug,
            env_level=os.environ.get("BOXWINE_LOG_LEVEL"),
        ),
        log_file=os.environ.get("BOXWINE_LOG_FILE"),
        log_file_level=os.environ.get("BOXWINE_LOG_FILE_LEVEL"),
    )


@cli.command()
@click.option(
    "--file",
    "-f",
    "file_path",
    type=click.Path(path_type=Path),
    default=Path("app.boxwine.toml"),
    show_default=True,
    help="Where to write the example config (.toml or .yml).",
)
@click.option("--force", is_flag=True, help="Overwrite an existing file.")
def init(file_path: Path, force: bool) -> None:
    """Initialize an example config file."""
    from boxwine.core.config.loader import write_example_config
    from boxwine.core.errors import ConfigError

    try:
        path = write_example_config(file_path, force=force)
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    click.secho(f"✅ Wrote {path}", fg="green")


@cli.command()
@click.option(
    "--file",
    "-f",
    "file_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Path to config file (default: auto-detect app.boxwine.toml).",
)
@click.option(
    "--output",
    "-o",
    "output_path",
    type=click.Path(path_type=Path),
    default=Path("My App.app"),
    show_default=True,
    help="Path of the app to create (must end with .app).",
)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def create(ctx: click.Context, file_path: Path | None, output_path: Path, as_json: bool) -> None:
    """Create a Mac app from a config file.

    Examples:

        boxwine create

        boxwine create -f game.boxwine.toml -o "Game.app"
    """
    from boxwine.core.config.loader import load_config
    from boxwine.core.engine.builder import build
    from boxwine.core.errors import BoxwineError

    try:
        config = load_config(file_path)
        report = build(config, output_path)
    except BoxwineError as e:
        if as_json:
            click.echo(json.dumps({"error": str(e)}, indent=2))
        else:
            click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(report.to_dict(), indent=2))
        return

    if not ctx.obj.get("quiet"):
        click.secho(f"\n📦 {config.app.name}", fg="cyan", bold=True)
        for stage in report.stages:
            click.secho("   ✓ ", fg="green", nl=False)
            click.echo(f"{stage.stage} ({stage.duration_ms}ms)")
        click.echo()
    click.secho(f"✅ Created {output_path}", fg="green")


@cli.group()
def config() -> None:
    """Configuration file commands."""


@config.command("check")
@click.option(
    "--file",
    "-f",
    "file_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Path to config file (default: auto-detect app.boxwine.toml).",
)
def config_check(file_path: Path | None) -> None:
    """Validate a config file without building anything."""
    from boxwine.core.config.loader import load_config
    from boxwine.core.errors import ConfigError

    try:
        config = load_config(file_path)
    except ConfigError as e:
        click.secho("❌ Configuration errors:", fg="red", bold=True)
        click.echo(f"   • {e}")
        sys.exit(1)

    click.secho("✅ Configuration is valid", fg="green", bold=True)
    click.echo(f"   App: {config.app.name}")
    click.echo(f"   Wine: {config.portable_wine_url}")
    click.echo(f"   Volumes: {len(config.wine.volumes)}")
    click.echo(f"   Runs: {len(config.wine.runs)}")
    click.echo(f"   Verbs: {', '.join(config.winetricks.verbs) or '-'}")


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
