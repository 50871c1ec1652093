"""
Deploy target provider plugins.
"""

from .base import BaseDeployProvider
from .vercel import VercelDeployProvider

__all__ = ["BaseDeployProvider", "VercelDeployProvider"]
