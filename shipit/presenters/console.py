"""
Console presenter for terminal output.

Implements human-readable output formatting for the CLI.
"""

import sys

from ..core.interfaces.presenter import IPresenter
from ..core.models.deploy import DeployReport, LegStatus


class ConsolePresenter(IPresenter):
    """
    Console output presenter.

    Formats output for human-readable terminal display.
    """

    def __init__(self, use_color: bool = True, file=None) -> None:
        """
        Initialize console presenter.

        Args:
            use_color: Whether to use ANSI color codes
            file: Output file (defaults to sys.stdout)
        """
        self._use_color = use_color and sys.stdout.isatty()
        self._file = file or sys.stdout
        self._err_file = sys.stderr

    def _color(self, text: str, code: str) -> str:
        return f"\033[{code}m{text}\033[0m" if self._use_color else text

    def print(self, message: str) -> None:
        """Print a message to output."""
        print(message, file=self._file)

    def write(self, text: str) -> None:
        """Write streamed tool output without adding a newline."""
        self._file.write(text)
        self._file.flush()

    def print_error(self, message: str) -> None:
        """Print an error message to stderr."""
        print(self._color(f"Error: {message}", "91"), file=self._err_file)

    def print_warning(self, message: str) -> None:
        """Print a warning message."""
        print(self._color(f"Warning: {message}", "93"), file=self._err_file)

    def print_report(self, report: DeployReport) -> None:
        """
        Print the per-target summary of a deploy.

        Args:
            report: Finished deploy report
        """
        print("", file=self._file)
        print(self._color(f"Deploy summary ({report.branch})", "1"), file=self._file)
        for leg in report.legs:
            if leg.status == LegStatus.SUCCEEDED:
                marker = self._color("[OK]", "92")
            else:
                marker = self._color("[FAIL]", "91")
            detail = leg.message.strip().splitlines()[-1] if leg.message.strip() else ""
            reason = f" ({leg.reason.value})" if leg.reason else ""
            line = f"  {marker} {leg.target.value}{reason}"
            print(f"{line}: {detail}" if detail else line, file=self._file)
        if report.files:
            print(f"  {len(report.files)} file(s) still changed", file=self._file)
