"""
Signal handling for a running deploy.

The first Ctrl-C asks the deploy to cancel (the running command is killed
and the remaining steps are skipped); a second Ctrl-C aborts immediately.
"""

from __future__ import annotations

import asyncio
import signal
import sys
from collections.abc import Callable

from ...core.interfaces.logger import ILogger


class DeploySignalHandler:
    """
    Manages SIGINT on an asyncio event loop while a deploy runs.

    Encapsulates interrupt state and provides callbacks for interrupt events.
    """

    def __init__(
        self,
        on_first_interrupt: Callable[[], None] | None = None,
        on_abort: Callable[[], None] | None = None,
        logger: ILogger | None = None,
    ) -> None:
        """
        Initialize signal handler.

        Args:
            on_first_interrupt: Callback when first Ctrl-C is received
            on_abort: Callback when second Ctrl-C is received (abort)
            logger: Logger for internal diagnostics
        """
        self._interrupt_count = 0
        self._on_first_interrupt = on_first_interrupt
        self._on_abort = on_abort
        self._loop: asyncio.AbstractEventLoop | None = None
        self._logger = logger

    @property
    def logger(self) -> ILogger:
        """Get logger, resolving from container or creating NullLogger."""
        if self._logger is None:
            from ...core.di import resolve_or_default
            from ..logging import NullLogger

            self._logger = resolve_or_default(ILogger, NullLogger)  # type: ignore[type-abstract]
        return self._logger

    def install(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        """Install the SIGINT handler on loop (default: the running loop)."""
        self._loop = loop or asyncio.get_running_loop()
        try:
            self._loop.add_signal_handler(signal.SIGINT, self._handle_signal)
            self.logger.debug("SIGINT handler installed")
        except (NotImplementedError, RuntimeError) as e:
            # Windows event loops have no add_signal_handler
            self.logger.debug("SIGINT handler not installed: %s", e)
            self._loop = None

    def restore(self) -> None:
        """Remove the SIGINT handler."""
        if self._loop is not None:
            self.logger.debug("Removing SIGINT handler")
            self._loop.remove_signal_handler(signal.SIGINT)
            self._loop = None

    def _handle_signal(self) -> None:
        """Handle SIGINT."""
        self._interrupt_count += 1
        self.logger.debug("SIGINT received: interrupt_count=%d", self._interrupt_count)

        if self._interrupt_count == 1:
            if self._on_first_interrupt:
                self._on_first_interrupt()
        else:
            self.logger.debug("Second interrupt, aborting immediately")
            if self._on_abort:
                self._on_abort()
            sys.exit(130)  # Standard exit code for SIGINT
