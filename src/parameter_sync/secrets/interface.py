"""
Abstract interface for local secret sources.

Defines the contract for reading a secret's plaintext from a local store.
"""

from abc import ABC, abstractmethod


class SecretSource(ABC):
    """Abstract base class for local secret source implementations."""

    @abstractmethod
    def fetch(self, location: str, key: str) -> bytes:
        """Fetch the plaintext of a secret.

        Args:
            location: Store directory; empty means the source's default store
            key: Lookup key within the store

        Returns:
            Plaintext bytes of the secret

        Raises:
            SecretRetrievalError: If the secret cannot be read
        """
        pass

    @property
    @abstractmethod
    def source_type(self) -> str:
        """Return the type of secret source (e.g., 'pass')."""
        pass
