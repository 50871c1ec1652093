"""
Command execution services.
"""

from .runner import CommandRunner
from .signal_handler import DeploySignalHandler

__all__ = ["CommandRunner", "DeploySignalHandler"]
