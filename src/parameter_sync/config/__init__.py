"""
Configuration management for parameter-sync.
"""

from .provider import ProviderConfig, ProviderClient, validate_account_id, validate_region
from .loading import SyncConfig, load_config, find_config_path
from .logging import bootstrap_logging

__all__ = [
    'ProviderConfig',
    'ProviderClient',
    'validate_account_id',
    'validate_region',
    'SyncConfig',
    'load_config',
    'find_config_path',
    'bootstrap_logging',
]
