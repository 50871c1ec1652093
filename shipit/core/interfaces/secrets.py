"""
Secret store interface.

Holds credentials such as the Vercel token outside of config files.
"""

from abc import ABC, abstractmethod


class ISecretStore(ABC):
    """Interface for a key/value credential store."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the stored value for key, or None if not set."""
        pass

    @abstractmethod
    def store(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        pass

    @abstractmethod
    def delete(self, key: str) -> bool:
        """
        Remove key from the store.

        Returns:
            True if a value was removed, False if key was not set
        """
        pass
