"""Pydantic models for Parameter Store responses."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel

SECURE_STRING = "SecureString"


class ParameterMetadata(BaseModel):
    """Parameter metadata as returned without decryption."""
    name: str
    type: str = SECURE_STRING
    key_id: Optional[str] = None
    description: Optional[str] = None
    last_modified: Optional[datetime] = None
    version: Optional[int] = None


class Parameter(BaseModel):
    """A parameter as returned by a get; value is only set when decrypted."""
    name: str
    type: str = SECURE_STRING
    value: Optional[str] = None
    version: Optional[int] = None
    last_modified: Optional[datetime] = None
