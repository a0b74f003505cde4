"""Pydantic models for parameter bindings.

A SecretBinding is what gets persisted in the local state file. It never holds
the secret itself, only a fingerprint of it.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, field_validator


class BindingState(str, Enum):
    """Lifecycle state of a binding as seen by the orchestrator."""
    ABSENT = "absent"
    PRESENT_UNVERIFIED = "present-unverified"
    PRESENT_VERIFIED = "present-verified"


class SecretBinding(BaseModel):
    """One pairing of a `pass` entry with an SSM parameter."""
    model_config = ConfigDict(extra="forbid")

    # Declared
    parameter_name: str
    pass_key: str
    pass_dir: str = ""
    description: Optional[str] = None
    key_id: Optional[str] = None

    # Observed
    id: str = ""
    arn: Optional[str] = None
    fingerprint: Optional[str] = None
    fingerprint_salt: Optional[str] = None
    last_modified: Optional[str] = None

    @field_validator("parameter_name", "pass_key")
    @classmethod
    def _not_blank(cls, value: str, info) -> str:
        if not value or not value.strip():
            raise ValueError(f"{info.field_name} is required")
        return value

    @property
    def state(self) -> BindingState:
        if not self.id:
            return BindingState.ABSENT
        if self.last_modified is None or self.arn is None:
            return BindingState.PRESENT_UNVERIFIED
        return BindingState.PRESENT_VERIFIED


class ParameterInfo(BaseModel):
    """Parameter details returned by the data source (never the value)."""
    id: str
    parameter_name: str
    type: str
    arn: str
