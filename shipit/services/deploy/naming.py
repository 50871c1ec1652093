"""
Project name derivation for hosted deploys.

Vercel project names are lowercase, limited to letters, digits, '_' and '-',
and at most 100 characters long.
"""

from __future__ import annotations

import json
import re
from pathlib import Path

DEFAULT_PROJECT_NAME = "deploy-project"
MAX_NAME_LENGTH = 100
MANIFEST_FILE = "package.json"

_INVALID_CHARS = re.compile(r"[^a-z0-9_-]")
_DASH_RUNS = re.compile(r"-+")


def sanitize_name(name: str | None, default: str = DEFAULT_PROJECT_NAME) -> str:
    """
    Turn an arbitrary string into a valid project name.

    Total: anything that sanitizes to nothing yields default.

    >>> sanitize_name("My Cool App!")
    'my-cool-app'
    >>> sanitize_name("***")
    'deploy-project'
    """
    if not name:
        return default
    cleaned = _INVALID_CHARS.sub("-", name.lower())
    cleaned = _DASH_RUNS.sub("-", cleaned).strip("-")
    cleaned = cleaned[:MAX_NAME_LENGTH].rstrip("-")
    return cleaned or default


def read_manifest_name(project_root: str | Path) -> str | None:
    """Read the `name` field of package.json, or None if unusable."""
    manifest = Path(project_root) / MANIFEST_FILE
    try:
        data = json.loads(manifest.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return None
    if not isinstance(data, dict):
        return None
    name = data.get("name")
    return name if isinstance(name, str) else None


def derive_project_name(project_root: str | Path, default: str = DEFAULT_PROJECT_NAME) -> str:
    """
    Pick the deploy name for a project.

    Tries the manifest name, then the directory name; the first one that
    sanitizes to something non-empty wins, otherwise default.
    """
    candidates = [read_manifest_name(project_root), Path(project_root).resolve().name]
    for candidate in candidates:
        name = sanitize_name(candidate, default="")
        if name:
            return name
    return sanitize_name(default)
