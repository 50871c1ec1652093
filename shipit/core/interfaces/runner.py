"""
Command runner interface.

A runner executes one shell command string and always resolves with a
CommandResult; failures are values, never exceptions.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable

from shipit.core.models.command import CommandResult

OutputListener = Callable[[str], None]


class ICommandRunner(ABC):
    """Interface for running shell commands."""

    @abstractmethod
    async def run(
        self,
        command: str,
        cwd: str,
        on_output: OutputListener | None = None,
        *,
        timeout: float | None = None,
    ) -> CommandResult:
        """
        Run a shell command and wait for it to exit.

        Args:
            command: Shell command string
            cwd: Working directory
            on_output: Called with each stdout/stderr chunk as it arrives
            timeout: Seconds before the process is killed (None uses the
                runner's default)

        Returns:
            CommandResult with success flag and captured output
        """
        pass
