"""
Local state file.

Holds the last persisted SecretBinding of every managed parameter, keyed by
parameter name. Bindings carry fingerprints, never secret values.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import BaseModel, ValidationError as PydanticValidationError

from .exceptions import StateError
from .resource.models import SecretBinding

logger = logging.getLogger(__name__)

STATE_ENV = "PARAMETER_SYNC_STATE"
DEFAULT_STATE_FILE = ".parameter-sync-state.json"
STATE_VERSION = 1


class StateManifest(BaseModel):
    """Container for all bindings in storage format."""
    version: int = STATE_VERSION
    bindings: Dict[str, SecretBinding] = {}


class StateStore:
    """Reads and writes the state file."""

    def __init__(self, path: Optional[str] = None):
        self.path = Path(path or os.getenv(STATE_ENV) or DEFAULT_STATE_FILE)

    def load(self) -> StateManifest:
        """Load the state file; a missing file is empty state.

        Raises:
            StateError: If the file is not valid state JSON
        """
        try:
            with open(self.path, 'r') as f:
                data = json.load(f)
        except FileNotFoundError:
            logger.debug(f"State file {self.path} not found")
            return StateManifest()
        except json.JSONDecodeError as e:
            raise StateError(f"Corrupted state file format: {e}", state_path=str(self.path)) from e

        try:
            manifest = StateManifest.model_validate(data)
        except PydanticValidationError as e:
            raise StateError(f"Invalid state file: {e}", state_path=str(self.path)) from e

        if manifest.version != STATE_VERSION:
            raise StateError(f"Unsupported state version {manifest.version}", state_path=str(self.path))

        logger.debug(f"Loaded {len(manifest.bindings)} bindings from {self.path}")
        return manifest

    def save(self, manifest: StateManifest) -> None:
        """Write the state file atomically with owner-only permissions."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, temp_path = tempfile.mkstemp(dir=str(self.path.parent), prefix=f".{self.path.name}.")
        try:
            with os.fdopen(fd, 'w') as f:
                f.write(manifest.model_dump_json(indent=2))
            os.chmod(temp_path, 0o600)
            os.replace(temp_path, self.path)
        except Exception:
            if os.path.exists(temp_path):
                os.unlink(temp_path)
            raise

        logger.debug(f"Saved {len(manifest.bindings)} bindings to {self.path}")

    def get(self, parameter_name: str) -> Optional[SecretBinding]:
        return self.load().bindings.get(parameter_name)

    def put(self, binding: SecretBinding) -> None:
        """Persist one binding; a binding with an empty id is removed instead."""
        manifest = self.load()
        if binding.id:
            manifest.bindings[binding.parameter_name] = binding
        else:
            manifest.bindings.pop(binding.parameter_name, None)
        self.save(manifest)

    def remove(self, parameter_name: str) -> None:
        manifest = self.load()
        if manifest.bindings.pop(parameter_name, None) is not None:
            self.save(manifest)

    def names(self) -> List[str]:
        return sorted(self.load().bindings)
