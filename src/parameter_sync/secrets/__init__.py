"""
Local secret access for parameter-sync.

Reads secrets from the local password store and fingerprints them so that only
the fingerprint is ever persisted.
"""

from .interface import SecretSource
from .pass_source import PassSecretSource, trim_line_terminator
from .fingerprint import Fingerprinter

__all__ = [
    # Interface
    'SecretSource',

    # Implementations
    'PassSecretSource',

    # Fingerprints
    'Fingerprinter',

    # Utilities
    'trim_line_terminator',
]
