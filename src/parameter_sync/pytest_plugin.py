"""
Pytest plugin providing parameter-sync fixtures.

Registered through the `pytest11` entry point, so projects that install
parameter-sync get fake secret sources and an in-memory parameter store in
their own tests.
"""

import pytest

from .remote.in_memory_client import InMemoryParameterStoreClient
from .state import StateStore
from .testing import FakeSecretSource, make_provider, fast_fingerprinter
from .resource.lifecycle import ParameterFromPassResource

ENV_VARS = [
    "PARAMETER_SYNC_CONFIG",
    "PARAMETER_SYNC_STATE",
    "PARAMETER_SYNC_LOGGING_CONFIG",
    "PASS_COMMAND",
    "PASSWORD_STORE_DIR",
]


@pytest.fixture
def isolated_sync_env(monkeypatch, tmp_path):
    """Clear parameter-sync environment variables and run in a temp directory."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def fake_secret_source():
    return FakeSecretSource()


@pytest.fixture
def parameter_store():
    return InMemoryParameterStoreClient()


@pytest.fixture
def provider_client(parameter_store):
    return make_provider(parameter_store)


@pytest.fixture
def parameter_resource(provider_client, fake_secret_source):
    return ParameterFromPassResource(provider_client, fake_secret_source, fast_fingerprinter())


@pytest.fixture
def state_store(tmp_path):
    return StateStore(str(tmp_path / "state.json"))
