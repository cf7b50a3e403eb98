"""
Configuration loader — reads a boxwine config file into ``BundleConfig``.

Two dialects are accepted and both produce the same model:

- TOML (``*.toml``, canonical): strict, typed tables as written by
  ``boxwine init``.
- YAML (``*.yml`` / ``*.yaml``): looser. Lists may be given as a
  single value, verbs as a comma-separated string, run args as a
  shell-style string, and ``volumes``/``runs`` are accepted as plural
  keys.

Each dialect adapter only turns the file into a plain mapping; the
pipeline never sees which one was used.
"""

from __future__ import annotations

import logging
import re
import shlex
import tomllib
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pydantic
import yaml

from boxwine.core.config.example import EXAMPLE_CONFIG, EXAMPLE_CONFIG_YAML
from boxwine.core.errors import ConfigError
from boxwine.core.models.config import BundleConfig

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "app.boxwine.toml"
CONFIG_FILE_CANDIDATES = (CONFIG_FILE, "app.boxwine.yml", "app.boxwine.yaml")

YAML_SUFFIXES = (".yml", ".yaml")


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for a boxwine config starting from ``start_dir``, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to the config file, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        for name in CONFIG_FILE_CANDIDATES:
            candidate = current / name
            if candidate.is_file():
                return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


# ── Dialect adapters ────────────────────────────────────────────────


def parse_toml(raw: str, path: Path) -> dict[str, Any]:
    """Strict dialect: TOML tables, no coercion."""
    try:
        return tomllib.loads(raw)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e


def parse_yaml(raw: str, path: Path) -> dict[str, Any]:
    """Loose dialect: YAML, normalized towards the TOML shape."""
    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")
    return _loosen(data)


def _as_list(value: Any) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def _split_words(value: Any) -> Any:
    """``"a, b c"`` → ``["a", "b", "c"]``; lists pass through."""
    if isinstance(value, str):
        return [w for w in re.split(r"[,\s]+", value) if w]
    return value


def _loosen_run(run: Any) -> Any:
    if isinstance(run, str):
        return {"program": run}
    if isinstance(run, dict) and isinstance(run.get("args"), str):
        run = dict(run)
        run["args"] = shlex.split(run["args"])
    return run


def _loosen(data: dict[str, Any]) -> dict[str, Any]:
    data = dict(data)

    wine = dict(data.get("wine") or {})
    for plural, key in (("volumes", "volume"), ("runs", "run")):
        if plural in wine and key not in wine:
            wine[key] = wine.pop(plural)
    if "volume" in wine:
        wine["volume"] = _as_list(wine["volume"])
    if "run" in wine:
        wine["run"] = [_loosen_run(r) for r in _as_list(wine["run"])]
    if isinstance(wine.get("build"), dict):
        # version: 5.0 / arch: 64 arrive as numbers
        wine["build"] = {
            k: str(v) if isinstance(v, (int, float)) and not isinstance(v, bool) else v
            for k, v in wine["build"].items()
        }
    if wine:
        data["wine"] = wine

    app = data.get("app")
    if isinstance(app, dict) and "entrypoint" in app:
        app = dict(app)
        app["entrypoint"] = _loosen_run(app["entrypoint"])
        data["app"] = app

    winetricks = data.get("winetricks")
    if isinstance(winetricks, dict) and "verbs" in winetricks:
        winetricks = dict(winetricks)
        winetricks["verbs"] = _as_list(_split_words(winetricks["verbs"]))
        data["winetricks"] = winetricks

    return data


def dialect_for(path: Path) -> Callable[[str, Path], dict[str, Any]]:
    """Pick the dialect adapter from the file suffix."""
    if path.suffix.lower() in YAML_SUFFIXES:
        return parse_yaml
    return parse_toml


# ── Loading ─────────────────────────────────────────────────────────


def config_from_mapping(data: dict[str, Any], source: str = "<mapping>") -> BundleConfig:
    """Validate a plain mapping into a BundleConfig."""
    try:
        return BundleConfig.model_validate(data)
    except pydantic.ValidationError as e:
        raise ConfigError(f"Invalid configuration in {source}: {e}") from e


def load_config(path: Path | None = None) -> BundleConfig:
    """Load and validate a bundle configuration.

    Args:
        path: Explicit config path. If None, searches upward from cwd.

    Returns:
        Validated, frozen BundleConfig.

    Raises:
        ConfigError: If the file is missing or invalid.
    """
    if path is None:
        path = find_config_file()

    if path is None:
        raise ConfigError(
            f"No {CONFIG_FILE} found. "
            "Run 'boxwine init' to create one, or specify --file."
        )

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    data = dialect_for(path)(raw, path)
    config = config_from_mapping(data, str(path))

    logger.info(
        "Loaded '%s': %d volumes, %d runs, %d verbs",
        config.app.name,
        len(config.wine.volumes),
        len(config.wine.runs),
        len(config.winetricks.verbs),
    )
    return config


def write_example_config(path: Path, force: bool = False) -> Path:
    """Write the example config to ``path``.

    YAML paths get the YAML dialect, everything else TOML.

    Raises:
        ConfigError: If ``path`` exists and ``force`` is not set, or it
            cannot be written.
    """
    if path.exists() and not force:
        raise ConfigError(f"{path} already exists (use --force to overwrite)")

    content = EXAMPLE_CONFIG_YAML if path.suffix.lower() in YAML_SUFFIXES else EXAMPLE_CONFIG
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot write {path}: {e}") from e
    return path
