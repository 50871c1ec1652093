"""
Configuration models.

Provides Pydantic models for shipit configuration with validation.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import ConfigDict, Field, field_validator

from .base import ShipitBaseModel

# Type aliases
LogLevel = Literal["debug", "info", "warning", "error"]

DEFAULT_MAX_BUFFER = 10 * 1024 * 1024  # 10MB


class ConfigBaseModel(ShipitBaseModel):
    """Base model for config sections with relaxed strict mode for TOML loading."""

    model_config = ConfigDict(
        strict=False,  # Allow coercion from TOML types
        validate_assignment=True,
        extra="ignore",  # Ignore unknown fields in config files
        populate_by_name=True,
        use_enum_values=True,
        revalidate_instances="never",
    )


class RunnerConfig(ConfigBaseModel):
    """Command runner configuration section."""

    max_buffer: Annotated[int, Field(gt=0)] = DEFAULT_MAX_BUFFER
    timeout: Annotated[float, Field(ge=0)] = 900

    @property
    def timeout_seconds(self) -> float | None:
        """Timeout for a single command, or None when disabled (0)."""
        return self.timeout or None


class GitConfig(ConfigBaseModel):
    """Git push configuration section."""

    remote: Annotated[str, Field(min_length=1)] = "origin"
    default_branch: Annotated[str, Field(min_length=1)] = "main"
    commit_message: Annotated[str, Field(min_length=1)] = "deploy: automatic"


class BuildConfig(ConfigBaseModel):
    """Build step configuration section."""

    command: Annotated[str, Field(min_length=1)] = "npm run build"


class VercelConfig(ConfigBaseModel):
    """Vercel deployment configuration section."""

    command: Annotated[str, Field(min_length=1)] = "npx vercel"
    secret_key: Annotated[str, Field(min_length=1)] = "vercelToken"
    default_name: Annotated[str, Field(min_length=1, max_length=100)] = "deploy-project"

    @field_validator("default_name")
    @classmethod
    def validate_default_name(cls, v: str) -> str:
        """The fallback project name must already be a valid identifier."""
        from ...services.deploy.naming import sanitize_name

        if not v or sanitize_name(v, default="") != v:
            raise ValueError(
                "default_name may only contain lowercase letters, digits, '-' and '_'"
            )
        return v


class SecretsConfig(ConfigBaseModel):
    """Secret store configuration section."""

    path: str | None = None  # Defaults to ~/.shipit/secrets.json


class LoggingConfig(ConfigBaseModel):
    """Logging configuration section."""

    level: LogLevel = "warning"
    console: bool = False
    file: bool = True


class ShipitConfig(ConfigBaseModel):
    """Complete shipit configuration.

    This model represents the full configuration with all sections.
    It can be loaded from TOML files or constructed programmatically.
    """

    runner: RunnerConfig = Field(default_factory=RunnerConfig)
    git: GitConfig = Field(default_factory=GitConfig)
    build: BuildConfig = Field(default_factory=BuildConfig)
    vercel: VercelConfig = Field(default_factory=VercelConfig)
    secrets: SecretsConfig = Field(default_factory=SecretsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ShipitConfig:
        """Create config from dictionary."""
        return cls.model_validate(data)

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary."""
        return self.model_dump()
