"""
Abstract interface for remote parameter stores.

Defines the contract the lifecycle operations consume. Absence of a parameter
is reported with ParameterNotFoundException; every other failure is the
underlying client's own exception, passed through unmodified.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from .models import Parameter, ParameterMetadata, SECURE_STRING


class ParameterStoreClient(ABC):
    """Abstract base class for parameter store clients."""

    @abstractmethod
    def get(self, name: str, with_decryption: bool = False) -> Parameter:
        """Get a parameter.

        Args:
            name: Parameter name
            with_decryption: Whether to decrypt and return the value

        Returns:
            Parameter; value is None unless with_decryption is set

        Raises:
            ParameterNotFoundException: If the parameter does not exist
        """
        pass

    @abstractmethod
    def describe(self, name: str) -> ParameterMetadata:
        """Get parameter metadata without decrypting anything.

        Raises:
            ParameterNotFoundException: If the parameter does not exist
        """
        pass

    @abstractmethod
    def put(self, name: str, value: str, type: str = SECURE_STRING, key_id: Optional[str] = None,
            description: Optional[str] = None, overwrite: bool = True) -> None:
        """Create or overwrite a parameter.

        Args:
            name: Parameter name
            value: Plaintext value; encrypted server side for SecureString
            type: Parameter type
            key_id: KMS key; the store default is used when None
            description: Description; left untouched when None
            overwrite: Replace an existing parameter of the same name
        """
        pass

    @abstractmethod
    def delete(self, name: str) -> None:
        """Delete a parameter.

        Raises:
            ParameterNotFoundException: If the parameter does not exist
        """
        pass

    @abstractmethod
    def list_parameters(self, path_prefix: Optional[str] = None) -> List[ParameterMetadata]:
        """List parameter metadata, optionally only names under path_prefix."""
        pass

    @property
    @abstractmethod
    def client_type(self) -> str:
        """Return the type of client (e.g., 'ssm', 'memory')."""
        pass
