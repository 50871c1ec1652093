"""
Deploy orchestration services.
"""

from .naming import derive_project_name, sanitize_name
from .orchestrator import NO_FILE_PREVIEW, DeployOrchestrator

__all__ = [
    "NO_FILE_PREVIEW",
    "DeployOrchestrator",
    "derive_project_name",
    "sanitize_name",
]
