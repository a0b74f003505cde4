"""
Tests for loading parameter-sync.yaml.
"""

import pytest

from parameter_sync.config.loading import find_config_path, load_config
from parameter_sync.exceptions import ConfigurationError

VALID_CONFIG = """
provider:
  region: eu-west-2
  allowed_account_ids: ["123456789012"]
bindings:
  - parameter_name: /app/db/password
    pass_key: app/db
    description: Database password
  - parameter_name: /app/api/token
    pass_key: app/api
    pass_dir: /srv/store
    key_id: alias/custom
"""


@pytest.fixture
def workdir(isolated_sync_env, monkeypatch):
    for name in ("AWS_REGION", "AWS_DEFAULT_REGION", "AWS_PROFILE"):
        monkeypatch.delenv(name, raising=False)
    return isolated_sync_env


def write(path, text):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)
    return path


class TestFindConfigPath:

    def test_nothing_found(self, workdir):
        assert find_config_path() is None

    def test_default_locations(self, workdir):
        write(workdir / "config" / "parameter-sync.yaml", VALID_CONFIG)
        assert str(find_config_path()) == "config/parameter-sync.yaml"

        write(workdir / "parameter-sync.yaml", VALID_CONFIG)
        assert str(find_config_path()) == "parameter-sync.yaml"

    def test_environment_override(self, workdir, monkeypatch):
        monkeypatch.setenv("PARAMETER_SYNC_CONFIG", "/etc/sync.yaml")
        assert str(find_config_path()) == "/etc/sync.yaml"


class TestLoadConfig:

    def test_load_valid_config(self, workdir):
        write(workdir / "parameter-sync.yaml", VALID_CONFIG)

        config = load_config()

        assert config.provider.region == "eu-west-2"
        assert config.provider.allowed_account_ids == ["123456789012"]
        assert [b.parameter_name for b in config.bindings] == ["/app/db/password", "/app/api/token"]

        token = config.get_binding("/app/api/token")
        assert token.pass_dir == "/srv/store"
        assert token.key_id == "alias/custom"
        assert token.id == ""
        assert config.get_binding("/missing") is None

    def test_explicit_path(self, workdir):
        path = write(workdir / "elsewhere.yaml", VALID_CONFIG)
        assert len(load_config(path).bindings) == 2

    def test_region_from_environment(self, workdir, monkeypatch):
        monkeypatch.setenv("AWS_REGION", "us-east-1")
        write(workdir / "parameter-sync.yaml", "bindings: []\n")

        assert load_config().provider.region == "us-east-1"

    def test_missing_file(self, workdir):
        with pytest.raises(ConfigurationError) as exc_info:
            load_config()
        assert "not found" in str(exc_info.value)

    def test_invalid_yaml(self, workdir):
        write(workdir / "parameter-sync.yaml", "bindings: [unclosed\n")
        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            load_config()

    def test_top_level_must_be_mapping(self, workdir):
        write(workdir / "parameter-sync.yaml", "- a\n- b\n")
        with pytest.raises(ConfigurationError, match="mapping"):
            load_config()

    def test_observed_fields_cannot_be_declared(self, workdir):
        write(workdir / "parameter-sync.yaml", """
bindings:
  - parameter_name: /x
    pass_key: x
    fingerprint: abc
""")
        with pytest.raises(ConfigurationError, match="fingerprint"):
            load_config()

    def test_missing_pass_key(self, workdir):
        write(workdir / "parameter-sync.yaml", """
bindings:
  - parameter_name: /x
""")
        with pytest.raises(ConfigurationError, match="pass_key"):
            load_config()

    def test_unknown_provider_field(self, workdir):
        write(workdir / "parameter-sync.yaml", "provider:\n  regoin: eu-west-2\n")
        with pytest.raises(ConfigurationError, match="regoin"):
            load_config()

    def test_duplicate_parameter_names(self, workdir):
        write(workdir / "parameter-sync.yaml", """
bindings:
  - parameter_name: /x
    pass_key: a
  - parameter_name: /x
    pass_key: b
""")
        with pytest.raises(ConfigurationError, match="Duplicate"):
            load_config()

    def test_guidance_names_config_path(self, workdir):
        path = write(workdir / "broken.yaml", "- a\n")
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(path)
        assert str(path) in exc_info.value.guidance
