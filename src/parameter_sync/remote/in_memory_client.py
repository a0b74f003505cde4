"""
In-memory parameter store client.

Used by unit tests and the pytest plugin for fast, isolated testing. Writes are
visible to the next read immediately.
"""

from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, List, Optional, Tuple

from .interface import ParameterStoreClient
from .models import Parameter, ParameterMetadata, SECURE_STRING
from ..exceptions import ParameterNotFoundException

DEFAULT_KEY_ID = "alias/aws/ssm"


class DecryptionNotAllowed(RuntimeError):
    """Raised by the in-memory client when a decrypting read has been forbidden."""
    pass


class InMemoryParameterStoreClient(ParameterStoreClient):
    """Parameter store client keeping parameters in a dict.

    Every call is appended to `calls` as (operation, name, details) so tests can
    assert on what was sent.
    """

    def __init__(self, allow_decryption: bool = True, clock: Optional[Callable[[], datetime]] = None):
        """Initialize an empty store.

        Args:
            allow_decryption: If False, any get with decryption raises DecryptionNotAllowed
            clock: Callable returning the current time, for last-modified stamps
        """
        self.allow_decryption = allow_decryption
        self.clock = clock or (lambda: datetime.now(timezone.utc))
        self.parameters: Dict[str, dict] = {}
        self.calls: List[Tuple[str, str, dict]] = []
        self._failures: Dict[str, Exception] = {}

    @property
    def client_type(self) -> str:
        return "memory"

    def fail_with(self, operation: str, error: Exception) -> None:
        """Make the next calls of an operation raise error (None to clear)."""
        if error is None:
            self._failures.pop(operation, None)
        else:
            self._failures[operation] = error

    def _record(self, operation: str, name: str, **details):
        self.calls.append((operation, name, details))
        if operation in self._failures:
            raise self._failures[operation]

    def _lookup(self, name: str) -> dict:
        if name not in self.parameters:
            raise ParameterNotFoundException(f"Parameter {name!r} not found", parameter_name=name)
        return self.parameters[name]

    def _next_timestamp(self, previous: Optional[datetime]) -> datetime:
        now = self.clock()
        if previous is not None and now <= previous:
            now = previous + timedelta(microseconds=1)
        return now

    def get(self, name: str, with_decryption: bool = False) -> Parameter:
        self._record("get", name, with_decryption=with_decryption)
        if with_decryption and not self.allow_decryption:
            raise DecryptionNotAllowed(f"Decrypting read of {name!r} is not allowed")
        record = self._lookup(name)
        return Parameter(
            name=name,
            type=record["type"],
            value=record["value"] if with_decryption else None,
            version=record["version"],
            last_modified=record["last_modified"],
        )

    def describe(self, name: str) -> ParameterMetadata:
        self._record("describe", name)
        record = self._lookup(name)
        return ParameterMetadata(
            name=name,
            type=record["type"],
            key_id=record["key_id"],
            description=record["description"],
            last_modified=record["last_modified"],
            version=record["version"],
        )

    def put(self, name: str, value: str, type: str = SECURE_STRING, key_id: Optional[str] = None,
            description: Optional[str] = None, overwrite: bool = True) -> None:
        self._record("put", name, type=type, value=value, key_id=key_id,
                     description=description, overwrite=overwrite)
        existing = self.parameters.get(name)
        if existing is not None and not overwrite:
            raise RuntimeError(f"Parameter {name!r} already exists")

        existing = existing or {"key_id": None, "description": None, "version": 0, "last_modified": None}
        self.parameters[name] = {
            "value": value,
            "type": type,
            "key_id": key_id or existing["key_id"] or (DEFAULT_KEY_ID if type == SECURE_STRING else None),
            "description": description if description is not None else existing["description"],
            "version": existing["version"] + 1,
            "last_modified": self._next_timestamp(existing["last_modified"]),
        }

    def delete(self, name: str) -> None:
        self._record("delete", name)
        self._lookup(name)
        del self.parameters[name]

    def list_parameters(self, path_prefix: Optional[str] = None) -> List[ParameterMetadata]:
        self._record("list", path_prefix or "")
        names = sorted(
            name for name in self.parameters
            if not path_prefix or name.startswith(path_prefix.rstrip("/") + "/")
        )
        return [self.describe(name) for name in names]
