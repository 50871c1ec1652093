"""
Click context extension for shipit CLI.

Provides ShipitContext dataclass that holds shipit-specific data
passed through the Click command chain via ctx.obj.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..core.interfaces.vcs import IVCSProvider
    from ..core.settings import ShipitSettings


@dataclass
class ShipitContext:
    """Extended context passed through Click command chain.

    Attributes:
        cwd: Current working directory
        project_root: Directory every command runs in (the repository root
            when inside a git repository, else cwd)
        repo_root: Path to git repository root (None if not in a repo)
        is_interactive: Whether stdin is a TTY (for prompts)
        settings: Loaded settings
    """

    cwd: Path
    project_root: Path
    repo_root: Path | None
    is_interactive: bool
    settings: ShipitSettings

    @classmethod
    def create(cls, cwd: Path | None = None, project: Path | None = None) -> ShipitContext:
        """Create a ShipitContext for the current environment.

        Args:
            cwd: Working directory override (defaults to Path.cwd())
            project: Explicit project directory (skips repository lookup)

        Returns:
            Configured ShipitContext instance
        """
        if cwd is None:
            cwd = Path.cwd()

        start = project or cwd
        repo_root = cls._get_repo_root(start)
        project_root = project or repo_root or cwd

        return cls(
            cwd=cwd,
            project_root=project_root,
            repo_root=repo_root,
            is_interactive=sys.stdin.isatty(),
            settings=cls._load_settings(project_root),
        )

    @staticmethod
    def _get_repo_root(start: Path) -> Path | None:
        """Get the git repository root containing start, if any."""
        from ..core.container import get_container

        container = get_container()
        if "git" in container.list_vcs_providers():
            vcs: IVCSProvider = container.get_vcs_provider("git")
        else:
            from ..plugins.vcs.git import GitVCSProvider

            vcs = GitVCSProvider()
        root = vcs.get_repo_root(str(start)) if start.is_dir() else None
        return Path(root) if root else None

    @staticmethod
    def _load_settings(start_dir: Path) -> ShipitSettings:
        from ..core.di import resolve_or_default
        from ..core.settings import ShipitSettings, load_settings

        return resolve_or_default(ShipitSettings, lambda: load_settings(start_dir=str(start_dir)))

    @property
    def has_repo(self) -> bool:
        """Check if we're in a git repository."""
        return self.repo_root is not None
