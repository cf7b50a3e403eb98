"""
Program runner — run installers and setup programs in the prefix.

Each program is started with ``wine start /wait`` so the pipeline
blocks until it exits. Host paths are passed with ``/unix``; ``c:``
paths are handed to Wine unchanged.
"""

from __future__ import annotations

import logging
from pathlib import Path

from boxwine.adapters.base import CommandRunner
from boxwine.core.errors import RunError
from boxwine.core.models.config import BundleConfig, RunSpec
from boxwine.core.paths import is_drive_path, normalize_windows_path, resolve_source_path
from boxwine.core.services.layout import wine_binary
from boxwine.core.services.wine_env import wine_env

logger = logging.getLogger(__name__)


def start_arguments(run: RunSpec, prefix_dir: Path) -> list[str]:
    """Arguments to ``wine`` for one run entry."""
    if is_drive_path(run.program):
        target = ["start", "/wait", normalize_windows_path(run.program)]
    else:
        host_path = resolve_source_path(prefix_dir, run.program).absolute()
        target = ["start", "/wait", "/unix", str(host_path)]
    return target + run.arguments


def run_programs(
    config: BundleConfig,
    runtime_dir: Path,
    prefix_dir: Path,
    runner: CommandRunner,
) -> None:
    """Run every configured program in order.

    Raises:
        RunError: On the first non-zero exit; later programs are skipped.
    """
    wine = str(wine_binary(runtime_dir))
    env = wine_env(config, prefix_dir)

    for run in config.wine.runs:
        logger.info("Running %s", run.program)
        result = runner.execute(wine, start_arguments(run, prefix_dir), env=env)
        if not result.ok:
            raise RunError(
                f"{run.program} failed",
                command=result.command,
                exit_code=result.exit_code,
                stderr=result.stderr,
            )
