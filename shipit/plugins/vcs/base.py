"""
Base VCS provider.

Holds the command runner and push settings shared by VCS providers.
"""

from __future__ import annotations

from abc import abstractmethod

from ...core.interfaces.runner import ICommandRunner
from ...core.interfaces.vcs import IVCSProvider


class BaseVCSProvider(IVCSProvider):
    """
    Abstract base class for VCS providers.

    Implements the Strategy pattern for version control operations. When no
    runner or settings are given, they are resolved from the service
    container so plugin discovery can instantiate providers without
    arguments.
    """

    def __init__(
        self,
        runner: ICommandRunner | None = None,
        remote: str | None = None,
        default_branch: str | None = None,
    ) -> None:
        self._runner = runner
        self._remote = remote
        self._default_branch = default_branch

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the VCS name (e.g., 'git', 'hg')."""
        pass

    @property
    def runner(self) -> ICommandRunner:
        """Get the command runner, resolving a default one if needed."""
        if self._runner is None:
            from ...core.di import resolve_or_default
            from ...services.execution.runner import CommandRunner

            self._runner = resolve_or_default(ICommandRunner, CommandRunner)  # type: ignore[type-abstract]
        return self._runner

    @property
    def remote(self) -> str:
        if self._remote is None:
            self._remote = _settings().git.remote
        return self._remote

    @property
    def default_branch(self) -> str:
        if self._default_branch is None:
            self._default_branch = _settings().git.default_branch
        return self._default_branch


def _settings():
    from ...core.di import resolve_or_default
    from ...core.settings import ShipitSettings, load_settings

    return resolve_or_default(ShipitSettings, load_settings)
