"""
Domain models — Pydantic types for boxwine.

All models are re-exported here for convenient access:

    from boxwine.core.models import BundleConfig, Volume, RunSpec, CommandResult
"""

from boxwine.core.models.command import CommandResult
from boxwine.core.models.config import (
    AppSpec,
    BuildSpec,
    BundleConfig,
    PrefixSpec,
    RunSpec,
    Volume,
    WineSpec,
    WinetricksSpec,
)

__all__ = [
    # command.py
    "CommandResult",
    # config.py
    "AppSpec",
    "BuildSpec",
    "BundleConfig",
    "PrefixSpec",
    "RunSpec",
    "Volume",
    "WineSpec",
    "WinetricksSpec",
]
