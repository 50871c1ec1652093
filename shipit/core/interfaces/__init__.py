"""
Interface definitions for shipit's services.

These interfaces define the contracts that implementations must follow,
so the orchestrator and CLI never depend on concrete classes.
"""

from .deploy import IDeployProvider
from .logger import ILogger
from .presenter import IPresenter
from .runner import ICommandRunner, OutputListener
from .secrets import ISecretStore
from .vcs import IVCSProvider

__all__ = [
    "ICommandRunner",
    "IDeployProvider",
    "ILogger",
    "IPresenter",
    "ISecretStore",
    "IVCSProvider",
    "OutputListener",
]
