"""
Test doubles for parameter-sync.

Used by the unit tests and by the pytest plugin fixtures so tests never spawn
`pass` or talk to AWS.
"""

from typing import Dict, List, Optional, Tuple

from .config.provider import ProviderClient
from .exceptions import SecretRetrievalError
from .remote.in_memory_client import InMemoryParameterStoreClient
from .resource.lifecycle import ParameterFromPassResource
from .secrets.fingerprint import Fingerprinter
from .secrets.interface import SecretSource

TEST_ACCOUNT_ID = "123456789012"
TEST_REGION = "eu-west-2"
TEST_PARTITION = "aws"


class FakeSecretSource(SecretSource):
    """In-memory secret source keyed by (location, key).

    A key registered with fail() behaves like `pass` exiting 1 with the given
    standard error.
    """

    def __init__(self, secrets: Optional[Dict[str, bytes]] = None):
        self.secrets: Dict[Tuple[str, str], bytes] = {}
        self.errors: Dict[Tuple[str, str], str] = {}
        self.fetches: List[Tuple[str, str]] = []
        for key, value in (secrets or {}).items():
            self.set(key, value)

    @property
    def source_type(self) -> str:
        return "fake"

    def set(self, key: str, value, location: str = "") -> None:
        if isinstance(value, str):
            value = value.encode("utf-8")
        self.secrets[(location, key)] = value
        self.errors.pop((location, key), None)

    def fail(self, key: str, stderr: str, location: str = "") -> None:
        self.errors[(location, key)] = stderr

    def fetch(self, location: str, key: str) -> bytes:
        self.fetches.append((location, key))
        if (location, key) in self.errors:
            raise SecretRetrievalError("`pass` exited with status 1", pass_key=key,
                                       stderr=self.errors[(location, key)])
        if (location, key) not in self.secrets:
            raise SecretRetrievalError("`pass` exited with status 1", pass_key=key,
                                       stderr=f"Error: {key} is not in the password store.\n")
        return self.secrets[(location, key)]


def fast_fingerprinter() -> Fingerprinter:
    """A Fingerprinter with a low scrypt cost, for tests only."""
    return Fingerprinter(n=2 ** 4)


def make_provider(store: Optional[InMemoryParameterStoreClient] = None) -> ProviderClient:
    return ProviderClient(
        account_id=TEST_ACCOUNT_ID,
        region=TEST_REGION,
        partition=TEST_PARTITION,
        ssm=store if store is not None else InMemoryParameterStoreClient(),
    )


def make_resource(source: Optional[FakeSecretSource] = None,
                  store: Optional[InMemoryParameterStoreClient] = None) -> ParameterFromPassResource:
    """Build a resource over fakes, with a cheap fingerprinter."""
    return ParameterFromPassResource(
        make_provider(store),
        source if source is not None else FakeSecretSource(),
        fast_fingerprinter(),
    )
