"""
Deployment provider interface definitions.

A deploy provider knows how to build a project and hand it to a hosting
CLI. Like VCS providers, it runs everything through an ICommandRunner.
"""

from abc import ABC, abstractmethod

from shipit.core.interfaces.runner import OutputListener
from shipit.core.models.command import CommandResult


class IDeployProvider(ABC):
    """Interface for hosting deploy targets."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider identifier, e.g. 'vercel'."""
        pass

    @abstractmethod
    def build_command(self) -> str:
        """Shell command that builds the project."""
        pass

    @abstractmethod
    def deploy_command(self, token: str, project_name: str) -> str:
        """Shell command that deploys the built project."""
        pass

    @abstractmethod
    async def build(
        self, project_root: str, on_output: OutputListener | None = None
    ) -> CommandResult:
        """Build the project."""
        pass

    @abstractmethod
    async def deploy(
        self,
        project_root: str,
        token: str,
        project_name: str,
        on_output: OutputListener | None = None,
    ) -> CommandResult:
        """Deploy the project under project_name using token."""
        pass
