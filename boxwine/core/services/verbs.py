"""
Verb installer — apply winetricks verbs to the prefix.
"""

from __future__ import annotations

import logging
from pathlib import Path

from boxwine.adapters.base import CommandRunner
from boxwine.core.errors import VerbError
from boxwine.core.models.config import BundleConfig
from boxwine.core.services.layout import wine_binary
from boxwine.core.services.wine_env import WINE, wine_env

logger = logging.getLogger(__name__)

WINETRICKS = "winetricks"
SANDBOX_VERB = "sandbox"


def verb_arguments(config: BundleConfig) -> list[str]:
    """Configured verbs, plus ``sandbox`` when the prefix is sandboxed."""
    args = config.verbs
    if config.sandbox and SANDBOX_VERB not in args:
        args.append(SANDBOX_VERB)
    return args


def install_verbs(
    config: BundleConfig,
    prefix_dir: Path,
    runner: CommandRunner,
    runtime_dir: Path | None = None,
) -> None:
    """Run winetricks once with every verb.

    Nothing is run when there are no verbs: winetricks without
    arguments opens its GUI.

    Raises:
        VerbError: If winetricks exits non-zero.
    """
    args = verb_arguments(config)
    if not args:
        logger.debug("No winetricks verbs to install")
        return

    env = wine_env(config, prefix_dir)
    if runtime_dir is not None:
        env[WINE] = str(wine_binary(runtime_dir))

    logger.info("Installing verbs: %s", " ".join(args))
    result = runner.execute(WINETRICKS, args, env=env)
    if not result.ok:
        raise VerbError(
            f"winetricks {' '.join(args)} failed",
            command=result.command,
            exit_code=result.exit_code,
            stderr=result.stderr,
        )
