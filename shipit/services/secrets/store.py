"""
File-backed secret store.

Keeps credentials in a JSON object at ~/.shipit/secrets.json, readable only
by the owner.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import TYPE_CHECKING

from ...core.exceptions import SecretStoreError
from ...core.interfaces.secrets import ISecretStore

if TYPE_CHECKING:
    from ...core.settings import ShipitSettings

DEFAULT_SECRETS_PATH = Path.home() / ".shipit" / "secrets.json"
SECRET_FILE_PERMISSIONS = 0o600


class FileSecretStore(ISecretStore):
    """
    Secret store backed by a JSON file.

    The file is re-read on every access so separate processes (CLI and
    panel) see each other's changes.
    """

    def __init__(self, path: Path | str | None = None) -> None:
        self.path = Path(path).expanduser() if path else DEFAULT_SECRETS_PATH

    @classmethod
    def from_settings(cls, settings: ShipitSettings) -> FileSecretStore:
        return cls(settings.secrets.path)

    def get(self, key: str) -> str | None:
        value = self._load().get(key)
        return value if isinstance(value, str) and value else None

    def store(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._save(data)

    def delete(self, key: str) -> bool:
        data = self._load()
        if key not in data:
            return False
        del data[key]
        self._save(data)
        return True

    def _load(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except OSError as e:
            raise SecretStoreError(
                f"Cannot read secret store: {e}", store_path=str(self.path), cause=e
            ) from e
        except ValueError as e:
            raise SecretStoreError(
                "Secret store is not valid JSON", store_path=str(self.path), cause=e
            ) from e
        if not isinstance(data, dict):
            raise SecretStoreError("Secret store must be a JSON object", store_path=str(self.path))
        return data

    def _save(self, data: dict) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            # Owner-only from creation
            fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, SECRET_FILE_PERMISSIONS)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, sort_keys=True)
            self.path.chmod(SECRET_FILE_PERMISSIONS)
        except OSError as e:
            raise SecretStoreError(
                f"Cannot write secret store: {e}", store_path=str(self.path), cause=e
            ) from e
