"""
Version control system provider interface definitions.

Providers build the VCS command strings and run them through an
ICommandRunner, so every call resolves with a result value.
"""

from abc import ABC, abstractmethod

from shipit.core.interfaces.runner import OutputListener
from shipit.core.models.command import CommandResult


class IVCSProvider(ABC):
    """
    Interface for version control operations used by a deploy.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """
        VCS identifier.

        Examples: 'git', 'hg'
        """
        pass

    @abstractmethod
    def get_repo_root(self, path: str | None = None) -> str | None:
        """
        Find the repository root from path.

        Args:
            path: Directory to start searching from (default: cwd)

        Returns:
            Path to repo root, or None if not in a repository
        """
        pass

    @abstractmethod
    async def get_branch(self, repo_root: str) -> str:
        """
        Get the current branch, falling back to the default branch when the
        query yields no output.
        """
        pass

    @abstractmethod
    async def get_status(
        self, repo_root: str, on_output: OutputListener | None = None
    ) -> list[str]:
        """
        Get the paths with working-tree changes.

        Returns:
            Changed paths in the order the VCS reports them
        """
        pass

    @abstractmethod
    async def diff(
        self, repo_root: str, path: str, on_output: OutputListener | None = None
    ) -> CommandResult:
        """Get the diff for one path."""
        pass

    @abstractmethod
    async def stage(
        self,
        repo_root: str,
        paths: list[str] | None = None,
        on_output: OutputListener | None = None,
    ) -> CommandResult:
        """
        Stage paths, or every change in the working tree when paths is empty.
        """
        pass

    @abstractmethod
    async def commit(
        self, repo_root: str, message: str, on_output: OutputListener | None = None
    ) -> CommandResult:
        """Commit the staged changes."""
        pass

    @abstractmethod
    async def has_staged_changes(self, repo_root: str) -> bool:
        """Check whether the index differs from HEAD."""
        pass

    @abstractmethod
    async def push(
        self,
        repo_root: str,
        branch: str,
        on_output: OutputListener | None = None,
    ) -> CommandResult:
        """Push branch to the configured remote."""
        pass
