"""
Bundle builder — the ordered build pipeline.

Owns ordering and error propagation across every stage. The flow is
strictly linear; each stage consumes what the previous one left on
disk:

    skeleton → metadata → download → extract → prefix → verbs
      → volumes (pre) → run → volumes (post) → cleanup → compress

The first failure aborts the build with a ``StageError`` naming the
stage. Nothing is rolled back: a failed build leaves a partial bundle
on disk.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, TypeVar

from boxwine.adapters.base import CommandRunner
from boxwine.adapters.shell.command import ShellCommandRunner
from boxwine.core.errors import BoxwineError, BundleIOError, StageError, ValidationError
from boxwine.core.models.config import BundleConfig
from boxwine.core.services import bundle_files
from boxwine.core.services.cleanup import delete_installers
from boxwine.core.services.compress import maybe_compress
from boxwine.core.services.download import download
from boxwine.core.services.extract import extract
from boxwine.core.services.layout import BUNDLE_SUFFIX, PREFIX_DIR_NAME, BundleLayout
from boxwine.core.services.prefix import initialize
from boxwine.core.services.programs import run_programs
from boxwine.core.services.verbs import install_verbs
from boxwine.core.services.volumes import CopyPhase, copy_volumes

logger = logging.getLogger(__name__)

T = TypeVar("T")

Downloader = Callable[[str, Path], Path]

# Stage names, in pipeline order
STAGE_BUNDLE_FILES = "bundle files"
STAGE_DOWNLOAD = "download"
STAGE_EXTRACT = "extract"
STAGE_PREFIX = "prefix"
STAGE_VERBS = "verbs"
STAGE_VOLUMES_PRE = "volumes (pre-install)"
STAGE_RUN = "run"
STAGE_VOLUMES_POST = "volumes (post-install)"
STAGE_CLEANUP = "cleanup"
STAGE_COMPRESS = "compress"

STAGES = (
    STAGE_BUNDLE_FILES,
    STAGE_DOWNLOAD,
    STAGE_EXTRACT,
    STAGE_PREFIX,
    STAGE_VERBS,
    STAGE_VOLUMES_PRE,
    STAGE_RUN,
    STAGE_VOLUMES_POST,
    STAGE_CLEANUP,
    STAGE_COMPRESS,
)


@dataclass
class StageResult:
    """Outcome of one pipeline stage."""

    stage: str
    status: str = "ok"              # ok, failed
    duration_ms: int = 0
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == "ok"


@dataclass
class BuildReport:
    """Result of a build: per-stage results plus the produced paths."""

    output_path: Path
    stages: list[StageResult] = field(default_factory=list)
    runtime_dir: Path | None = None
    prefix_dir: Path | None = None
    prefix_archive: Path | None = None

    @property
    def all_ok(self) -> bool:
        return all(s.ok for s in self.stages)

    @property
    def completed_stages(self) -> list[str]:
        return [s.stage for s in self.stages if s.ok]

    @property
    def failed_stage(self) -> str | None:
        for s in self.stages:
            if not s.ok:
                return s.stage
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "output_path": str(self.output_path),
            "status": "ok" if self.all_ok else "failed",
            "runtime_dir": str(self.runtime_dir) if self.runtime_dir else None,
            "prefix_dir": str(self.prefix_dir) if self.prefix_dir else None,
            "prefix_archive": str(self.prefix_archive) if self.prefix_archive else None,
            "stages": [
                {
                    "stage": s.stage,
                    "status": s.status,
                    "duration_ms": s.duration_ms,
                    "error": s.error,
                }
                for s in self.stages
            ],
        }


def validate_output_path(output_path: Path) -> None:
    """Reject output paths that are not ``*.app``.

    Raises:
        ValidationError: If the name lacks the bundle suffix.
    """
    name = output_path.name
    if not name.endswith(BUNDLE_SUFFIX) or name == BUNDLE_SUFFIX:
        raise ValidationError(f'output "{output_path}" must end with "{BUNDLE_SUFFIX}"')


def create_skeleton(layout: BundleLayout) -> None:
    """Create the bundle root and its MacOS/Resources directories.

    Raises:
        BundleIOError: If the root exists or cannot be created.
    """
    try:
        layout.root.mkdir(parents=True, exist_ok=False)
    except FileExistsError as e:
        raise BundleIOError(f"Output already exists: {layout.root}") from e
    except OSError as e:
        raise BundleIOError(f"Unable to create app directory {layout.root}: {e}") from e

    for directory in (layout.macos_dir, layout.resources_dir):
        try:
            directory.mkdir(parents=True)
        except OSError as e:
            raise BundleIOError(f"Unable to create {directory}: {e}") from e


def _run_stage(report: BuildReport, stage: str, fn: Callable[..., T], *args: Any) -> T:
    """Run one stage, recording its result and wrapping its failure."""
    start = time.monotonic()
    try:
        value = fn(*args)
    except BoxwineError as e:
        elapsed_ms = int((time.monotonic() - start) * 1000)
        report.stages.append(
            StageResult(stage=stage, status="failed", duration_ms=elapsed_ms, error=str(e))
        )
        logger.info("✗ %s → failed", stage)
        raise StageError(stage, e) from e

    elapsed_ms = int((time.monotonic() - start) * 1000)
    report.stages.append(StageResult(stage=stage, duration_ms=elapsed_ms))
    logger.info("✓ %s (%dms)", stage, elapsed_ms)
    return value


def _write_bundle_files(config: BundleConfig, layout: BundleLayout) -> None:
    bundle_files.write_info_plist(config, layout.contents_dir)
    bundle_files.write_launch_script(config, PREFIX_DIR_NAME, layout.macos_dir)
    bundle_files.copy_icon(config, layout.resources_dir)
    bundle_files.bundle_winetricks(config, layout.macos_dir)


def build(
    config: BundleConfig,
    output_path: Path,
    runner: CommandRunner | None = None,
    downloader: Downloader = download,
) -> BuildReport:
    """Build a ``.app`` bundle from ``config`` at ``output_path``.

    Args:
        config: Fully loaded bundle configuration (read-only).
        output_path: Bundle path; must end with ``.app`` and not exist.
        runner: Command runner for tar, wineboot, winetricks and wine.
            Defaults to a ShellCommandRunner.
        downloader: ``(url, destination_dir) -> archive_path``.

    Returns:
        BuildReport with one StageResult per stage.

    Raises:
        ValidationError: If ``output_path`` does not end with ``.app``
            (nothing is created).
        BundleIOError: If the bundle skeleton cannot be created.
        StageError: If any later stage fails; ``cause`` holds the
            stage's own error.
    """
    validate_output_path(output_path)
    runner = runner or ShellCommandRunner()

    layout = BundleLayout(root=output_path)
    report = BuildReport(output_path=output_path)

    logger.info("Creating %s", output_path)
    create_skeleton(layout)

    # Prefix name is fixed before the launch script is generated
    _run_stage(report, STAGE_BUNDLE_FILES, _write_bundle_files, config, layout)

    archive = _run_stage(
        report, STAGE_DOWNLOAD, downloader, config.portable_wine_url, layout.macos_dir,
    )
    runtime_dir = _run_stage(
        report, STAGE_EXTRACT, extract, archive, layout.macos_dir, runner,
    )
    report.runtime_dir = runtime_dir

    prefix_dir = _run_stage(
        report, STAGE_PREFIX, initialize, config, runtime_dir, layout.macos_dir, runner,
    )
    report.prefix_dir = prefix_dir

    _run_stage(report, STAGE_VERBS, install_verbs, config, prefix_dir, runner, runtime_dir)
    _run_stage(report, STAGE_VOLUMES_PRE, copy_volumes, config, prefix_dir, CopyPhase.PRE)
    _run_stage(report, STAGE_RUN, run_programs, config, runtime_dir, prefix_dir, runner)
    _run_stage(report, STAGE_VOLUMES_POST, copy_volumes, config, prefix_dir, CopyPhase.POST)
    _run_stage(report, STAGE_CLEANUP, delete_installers, config, prefix_dir)

    report.prefix_archive = _run_stage(
        report, STAGE_COMPRESS, maybe_compress, config, prefix_dir, runner,
    )

    logger.info("Built %s", output_path)
    return report
