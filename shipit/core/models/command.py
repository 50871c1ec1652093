"""
Command execution models.

Provides the Pydantic model returned by every command runner invocation.
"""

from __future__ import annotations

from pydantic import computed_field

from .base import ImmutableModel


class CommandResult(ImmutableModel):
    """Result of running one shell command.

    Produced once per invocation. stdout/stderr hold everything captured,
    whether or not the command succeeded.
    """

    success: bool
    stdout: str = ""
    stderr: str = ""
    exit_code: int | None = None
    timed_out: bool = False
    buffer_exceeded: bool = False

    @computed_field  # type: ignore[prop-decorator]
    @property
    def output(self) -> str:
        """stdout if non-empty, else stderr."""
        return self.stdout or self.stderr

    @classmethod
    def failed(cls, message: str, stdout: str = "", exit_code: int | None = None) -> CommandResult:
        """Create a failed result carrying message as stderr.

        Args:
            message: Error text
            stdout: Any output captured before the failure
            exit_code: Process exit code, if the process ran

        Returns:
            CommandResult with success=False
        """
        return cls(success=False, stdout=stdout, stderr=message, exit_code=exit_code)
