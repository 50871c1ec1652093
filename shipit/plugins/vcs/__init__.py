"""
Version control system provider plugins.
"""

from .base import BaseVCSProvider
from .git import GitVCSProvider, parse_porcelain

__all__ = [
    "BaseVCSProvider",
    "GitVCSProvider",
    "parse_porcelain",
]
