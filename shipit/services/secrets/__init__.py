"""
Credential storage.
"""

from .store import DEFAULT_SECRETS_PATH, FileSecretStore

__all__ = ["DEFAULT_SECRETS_PATH", "FileSecretStore"]
