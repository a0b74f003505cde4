"""Tests for SecretBinding validation and lifecycle states."""

import pytest
from pydantic import ValidationError

from parameter_sync.resource.models import BindingState, SecretBinding


def test_minimal_binding_is_absent():
    binding = SecretBinding(parameter_name="/app/db/password", pass_key="app/db")

    assert binding.id == ""
    assert binding.pass_dir == ""
    assert binding.state == BindingState.ABSENT


def test_binding_with_id_but_no_metadata_is_unverified():
    binding = SecretBinding(parameter_name="/x", pass_key="x", id="/x")
    assert binding.state == BindingState.PRESENT_UNVERIFIED

    binding = binding.model_copy(update={"last_modified": "2024-01-01T00:00:00+00:00"})
    assert binding.state == BindingState.PRESENT_UNVERIFIED


def test_binding_with_metadata_is_verified():
    binding = SecretBinding(
        parameter_name="/x", pass_key="x", id="/x",
        arn="arn:aws:ssm:eu-west-2:123456789012:parameter/x",
        last_modified="2024-01-01T00:00:00+00:00",
    )
    assert binding.state == BindingState.PRESENT_VERIFIED


@pytest.mark.parametrize("field", ["parameter_name", "pass_key"])
@pytest.mark.parametrize("value", ["", "   "])
def test_required_fields_must_not_be_blank(field, value):
    fields = {"parameter_name": "/x", "pass_key": "x"}
    fields[field] = value

    with pytest.raises(ValidationError) as exc_info:
        SecretBinding(**fields)
    assert field in str(exc_info.value)


def test_unknown_fields_are_rejected():
    with pytest.raises(ValidationError):
        SecretBinding(parameter_name="/x", pass_key="x", value="s3cr3t")


def test_json_round_trip_has_no_secret_field():
    binding = SecretBinding(parameter_name="/x", pass_key="x", fingerprint="ab" * 32, fingerprint_salt="cd" * 16)

    restored = SecretBinding.model_validate_json(binding.model_dump_json())

    assert restored == binding
    assert "value" not in binding.model_dump()
