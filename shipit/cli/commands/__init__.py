"""
Click command implementations for shipit CLI.

Each module corresponds to a shipit command (e.g., deploy.py implements
'shipit deploy').
"""

from .config import config
from .deploy import deploy
from .init import init
from .panel import panel
from .preview import preview
from .status import status
from .token import token

COMMANDS = [
    config,
    deploy,
    init,
    panel,
    preview,
    status,
    token,
]

__all__ = [
    "COMMANDS",
    "config",
    "deploy",
    "init",
    "panel",
    "preview",
    "status",
    "token",
]
