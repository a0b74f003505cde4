"""
Remote parameter store access for parameter-sync.

Provides the client contract used by the lifecycle operations, with an SSM
Parameter Store implementation and an in-memory one for tests.
"""

from .models import Parameter, ParameterMetadata, SECURE_STRING
from .interface import ParameterStoreClient
from .ssm_client import SSMParameterStoreClient
from .in_memory_client import InMemoryParameterStoreClient, DecryptionNotAllowed

__all__ = [
    # Models
    'Parameter',
    'ParameterMetadata',
    'SECURE_STRING',

    # Interface
    'ParameterStoreClient',

    # Implementations
    'SSMParameterStoreClient',
    'InMemoryParameterStoreClient',
    'DecryptionNotAllowed',
]
