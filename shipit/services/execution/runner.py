"""
Shell command runner.

Runs one shell command per call, streams its output to a listener while it
runs, and always resolves with a CommandResult. Failures (non-zero exit,
missing command, unusable working directory, too much output, timeout) are
reported in the result, never raised.
"""

from __future__ import annotations

import asyncio
import codecs
import os
import signal
from typing import TYPE_CHECKING

from ...core.interfaces.logger import ILogger
from ...core.interfaces.runner import ICommandRunner, OutputListener
from ...core.models.command import CommandResult
from ...core.models.config import DEFAULT_MAX_BUFFER
from ...filters.redact import redact

if TYPE_CHECKING:
    from ...core.settings import ShipitSettings

READ_CHUNK_SIZE = 64 * 1024


class _StreamCapture:
    """Accumulates one pipe's output up to a byte limit."""

    def __init__(self, limit: int) -> None:
        self._limit = limit
        self._size = 0
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._parts: list[str] = []
        self.exceeded = False

    def feed(self, data: bytes) -> str:
        """Store data (truncated at the limit) and return the decoded text."""
        room = self._limit - self._size
        if len(data) > room:
            data = data[:room]
            self.exceeded = True
        self._size += len(data)
        text = self._decoder.decode(data)
        if text:
            self._parts.append(text)
        return text

    @property
    def text(self) -> str:
        return "".join(self._parts) + self._decoder.decode(b"", final=True)


class CommandRunner(ICommandRunner):
    """
    Runs shell commands with asyncio subprocesses.

    Each command runs in its own process group, so killing it on timeout,
    overflow or cancellation also stops anything the shell started
    (npx, node, git credential helpers).

    Usage:
        runner = CommandRunner(timeout=600)
        result = await runner.run("git status --porcelain", "/path/to/repo", print)
    """

    def __init__(
        self,
        max_buffer: int = DEFAULT_MAX_BUFFER,
        timeout: float | None = None,
        logger: ILogger | None = None,
    ) -> None:
        """
        Initialize runner.

        Args:
            max_buffer: Maximum bytes captured per stream before the command
                is killed
            timeout: Default seconds before a command is killed (None waits
                forever)
            logger: Logger for internal diagnostics
        """
        self._max_buffer = max_buffer
        self._timeout = timeout
        self._logger = logger

    @classmethod
    def from_settings(cls, settings: ShipitSettings, logger: ILogger | None = None) -> CommandRunner:
        """Create a runner from the [runner] config section."""
        return cls(
            max_buffer=settings.runner.max_buffer,
            timeout=settings.runner.timeout_seconds,
            logger=logger,
        )

    @property
    def logger(self) -> ILogger:
        """Get logger, resolving from container or creating NullLogger."""
        if self._logger is None:
            from ...core.di import resolve_or_default
            from ..logging import NullLogger

            self._logger = resolve_or_default(ILogger, NullLogger)  # type: ignore[type-abstract]
        return self._logger

    async def run(
        self,
        command: str,
        cwd: str,
        on_output: OutputListener | None = None,
        *,
        timeout: float | None = None,
    ) -> CommandResult:
        """Run command in cwd and wait for it to exit."""
        limit = timeout if timeout is not None else self._timeout
        safe_command = redact(command)
        self.logger.debug("Running in %s: %s", cwd, safe_command)

        try:
            process = await asyncio.create_subprocess_shell(
                command,
                cwd=cwd,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                start_new_session=True,
            )
        except OSError as e:
            self.logger.warning("Failed to start %s: %s", safe_command, e)
            return CommandResult.failed(str(e))

        stdout = _StreamCapture(self._max_buffer)
        stderr = _StreamCapture(self._max_buffer)
        timed_out = False

        try:
            if limit:
                exit_code = await asyncio.wait_for(
                    self._communicate(process, stdout, stderr, on_output), timeout=limit
                )
            else:
                exit_code = await self._communicate(process, stdout, stderr, on_output)
        except asyncio.TimeoutError:
            self.logger.warning("Command timed out after %ss: %s", limit, safe_command)
            exit_code = await self._terminate(process)
            timed_out = True
        except BaseException:
            # Cancelled, or the output listener raised
            self.logger.debug("Stopping command: %s", safe_command)
            await self._terminate(process)
            raise

        buffer_exceeded = stdout.exceeded or stderr.exceeded
        err_text = stderr.text
        if buffer_exceeded:
            err_text += f"\nOutput exceeded {self._max_buffer} bytes; command was stopped."
        if timed_out:
            err_text += f"\nCommand timed out after {limit} seconds."

        success = exit_code == 0 and not (timed_out or buffer_exceeded)
        if not success:
            self.logger.info("Command failed (exit %s): %s", exit_code, safe_command)

        return CommandResult(
            success=success,
            stdout=stdout.text,
            stderr=err_text,
            exit_code=exit_code,
            timed_out=timed_out,
            buffer_exceeded=buffer_exceeded,
        )

    async def _communicate(
        self,
        process: asyncio.subprocess.Process,
        stdout: _StreamCapture,
        stderr: _StreamCapture,
        on_output: OutputListener | None,
    ) -> int:
        """Pump both pipes until EOF, then wait for exit."""
        await asyncio.gather(
            self._pump(process, process.stdout, stdout, on_output),
            self._pump(process, process.stderr, stderr, on_output),
        )
        return await process.wait()

    async def _pump(
        self,
        process: asyncio.subprocess.Process,
        stream: asyncio.StreamReader | None,
        capture: _StreamCapture,
        on_output: OutputListener | None,
    ) -> None:
        if stream is None:
            return
        while True:
            data = await stream.read(READ_CHUNK_SIZE)
            if not data:
                return
            text = capture.feed(data)
            if text and on_output is not None:
                on_output(text)
            if capture.exceeded:
                self.logger.warning("Output limit of %d bytes exceeded", self._max_buffer)
                self._kill(process)
                return

    @staticmethod
    def _kill(process: asyncio.subprocess.Process) -> None:
        """Kill the process group started for the command."""
        if process.returncode is not None:
            return
        try:
            if hasattr(os, "killpg"):
                os.killpg(process.pid, signal.SIGKILL)
            else:
                process.kill()
        except ProcessLookupError:
            pass

    async def _terminate(self, process: asyncio.subprocess.Process) -> int | None:
        """Kill the command and wait until it has exited."""
        self._kill(process)
        return await process.wait()
