"""
Pydantic models for shipit.

This package provides typed, validated models for all shipit data structures.
"""

from .base import ImmutableModel, ShipitBaseModel
from .command import CommandResult
from .config import (
    BuildConfig,
    GitConfig,
    LoggingConfig,
    RunnerConfig,
    SecretsConfig,
    ShipitConfig,
    VercelConfig,
)
from .deploy import (
    DeployReport,
    DeployRequest,
    DeployTarget,
    LegFailure,
    LegResult,
    LegStatus,
)

__all__ = [
    "BuildConfig",
    "CommandResult",
    "DeployReport",
    "DeployRequest",
    "DeployTarget",
    "GitConfig",
    "ImmutableModel",
    "LegFailure",
    "LegResult",
    "LegStatus",
    "LoggingConfig",
    "RunnerConfig",
    "SecretsConfig",
    "ShipitBaseModel",
    "ShipitConfig",
    "VercelConfig",
]
