"""
Loading of parameter-sync.yaml.

Example:

    provider:
      region: eu-west-2
      allowed_account_ids: ["123456789012"]
    bindings:
      - parameter_name: /app/db/password
        pass_key: app/db
        description: Database password
"""

import logging
import os
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, ValidationError as PydanticValidationError

from .provider import ProviderConfig
from ..exceptions import ConfigurationError
from ..resource.models import SecretBinding

logger = logging.getLogger(__name__)

CONFIG_ENV = "PARAMETER_SYNC_CONFIG"
CONFIG_PATHS = [
    Path("parameter-sync.yaml"),
    Path("config/parameter-sync.yaml"),
]
DECLARED_FIELDS = {"parameter_name", "pass_key", "pass_dir", "description", "key_id"}


class SyncConfig(BaseModel):
    """Provider settings and declared bindings."""
    provider: ProviderConfig
    bindings: List[SecretBinding] = []

    def get_binding(self, parameter_name: str) -> Optional[SecretBinding]:
        for binding in self.bindings:
            if binding.parameter_name == parameter_name:
                return binding
        return None


def find_config_path() -> Optional[Path]:
    """Locate the config file: PARAMETER_SYNC_CONFIG first, then the default paths."""
    override = os.getenv(CONFIG_ENV)
    if override:
        return Path(override)
    for config_path in CONFIG_PATHS:
        if config_path.exists():
            return config_path
    return None


def load_config(config_path: Optional[Path] = None) -> SyncConfig:
    """Load and validate parameter-sync.yaml.

    Args:
        config_path: Explicit path; located with find_config_path() when None

    Raises:
        ConfigurationError: If the file is missing, not YAML, or invalid
    """
    config_path = Path(config_path) if config_path else find_config_path()
    if config_path is None or not config_path.exists():
        raise ConfigurationError(
            f"Configuration file not found: {config_path or CONFIG_PATHS[0]}",
            config_path=str(config_path) if config_path else None
        )

    try:
        with open(config_path, 'r') as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_path}: {e}", config_path=str(config_path)) from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Expected a mapping at the top of {config_path}", config_path=str(config_path))

    bindings = data.get('bindings') or []
    for entry in bindings:
        unknown = set(entry or {}) - DECLARED_FIELDS
        if unknown:
            raise ConfigurationError(
                f"Unknown binding fields in {config_path}: {', '.join(sorted(unknown))}",
                config_path=str(config_path)
            )

    try:
        config = SyncConfig(
            provider=ProviderConfig.from_mapping(data.get('provider')),
            bindings=[SecretBinding(**(entry or {})) for entry in bindings],
        )
    except PydanticValidationError as e:
        raise ConfigurationError(f"Invalid configuration in {config_path}: {e}", config_path=str(config_path)) from e

    names = [binding.parameter_name for binding in config.bindings]
    duplicates = sorted({name for name in names if names.count(name) > 1})
    if duplicates:
        raise ConfigurationError(
            f"Duplicate parameter_name in {config_path}: {', '.join(duplicates)}",
            config_path=str(config_path)
        )

    logger.debug(f"Loaded {len(config.bindings)} bindings from {config_path}")
    return config
