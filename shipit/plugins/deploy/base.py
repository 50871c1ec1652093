"""
Base deploy provider.
"""

from __future__ import annotations

from abc import abstractmethod

from ...core.interfaces.deploy import IDeployProvider
from ...core.interfaces.runner import ICommandRunner, OutputListener
from ...core.models.command import CommandResult


class BaseDeployProvider(IDeployProvider):
    """
    Abstract base class for deploy providers.

    Subclasses only describe their commands; running them goes through the
    shared command runner.
    """

    def __init__(self, runner: ICommandRunner | None = None) -> None:
        self._runner = runner

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    @property
    def runner(self) -> ICommandRunner:
        """Get the command runner, resolving a default one if needed."""
        if self._runner is None:
            from ...core.di import resolve_or_default
            from ...services.execution.runner import CommandRunner

            self._runner = resolve_or_default(ICommandRunner, CommandRunner)  # type: ignore[type-abstract]
        return self._runner

    async def build(
        self, project_root: str, on_output: OutputListener | None = None
    ) -> CommandResult:
        return await self.runner.run(self.build_command(), project_root, on_output)

    async def deploy(
        self,
        project_root: str,
        token: str,
        project_name: str,
        on_output: OutputListener | None = None,
    ) -> CommandResult:
        return await self.runner.run(
            self.deploy_command(token, project_name), project_root, on_output
        )
