"""
Output presenters for shipit CLI.
"""

from .console import ConsolePresenter

__all__ = ["ConsolePresenter"]
