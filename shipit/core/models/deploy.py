"""
Deploy domain models.

Provides the request, per-target outcome, and report models for a deploy.
"""

from __future__ import annotations

from enum import Enum

from pydantic import ConfigDict, Field, computed_field, field_validator

from .base import ImmutableModel


class DeployTarget(str, Enum):
    """Where a deploy goes. Each target runs its own leg."""

    GITHUB = "github"
    VERCEL = "vercel"


class LegStatus(str, Enum):
    """Final state of one leg."""

    SUCCEEDED = "succeeded"
    FAILED = "failed"


class LegFailure(str, Enum):
    """Why a leg stopped. Each value is a distinct signal for observers."""

    STAGE_FAILED = "stage_failed"
    COMMIT_FAILED = "commit_failed"
    PUSH_FAILED = "push_failed"
    BUILD_FAILED = "build_failed"
    TOKEN_MISSING = "token_missing"
    DEPLOY_FAILED = "deploy_failed"


class _DeployModel(ImmutableModel):
    """Deploy models accept plain strings for enum fields."""

    model_config = ConfigDict(
        frozen=True,
        strict=False,
        extra="forbid",
        populate_by_name=True,
        use_enum_values=False,
        revalidate_instances="never",
    )


class DeployRequest(_DeployModel):
    """A single user-triggered deploy. Not persisted."""

    targets: frozenset[DeployTarget]
    files: list[str] = Field(default_factory=list)
    token: str | None = None

    @field_validator("files", mode="before")
    @classmethod
    def drop_empty_files(cls, v: list[str] | None) -> list[str]:
        """Treat None as 'stage everything' and ignore blank paths."""
        if v is None:
            return []
        return [f for f in v if isinstance(f, str) and f.strip()] if isinstance(v, list) else v

    @field_validator("token", mode="before")
    @classmethod
    def blank_token_is_none(cls, v: str | None) -> str | None:
        """An empty token means 'use the stored one'."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    def wants(self, target: DeployTarget) -> bool:
        """Check whether target was requested."""
        return target in self.targets


class LegResult(_DeployModel):
    """Outcome of one leg."""

    target: DeployTarget
    status: LegStatus
    reason: LegFailure | None = None
    message: str = ""

    @computed_field  # type: ignore[prop-decorator]
    @property
    def succeeded(self) -> bool:
        return self.status == LegStatus.SUCCEEDED

    @classmethod
    def ok(cls, target: DeployTarget, message: str = "") -> LegResult:
        return cls(target=target, status=LegStatus.SUCCEEDED, message=message)

    @classmethod
    def fail(cls, target: DeployTarget, reason: LegFailure, message: str = "") -> LegResult:
        return cls(target=target, status=LegStatus.FAILED, reason=reason, message=message)


class DeployReport(_DeployModel):
    """Result of a whole deploy: branch, each leg, and the post-deploy status."""

    branch: str
    legs: list[LegResult] = Field(default_factory=list)
    files: list[str] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def succeeded(self) -> bool:
        """True if every requested leg succeeded."""
        return all(leg.succeeded for leg in self.legs)

    def leg(self, target: DeployTarget) -> LegResult | None:
        """Get the result for target, or None if it was not requested."""
        for leg in self.legs:
            if leg.target == target:
                return leg
        return None
