"""
Tests for the invoke tasks, with the AWS and `pass` side replaced by fakes.
"""

import json

import pytest
from invoke import Context

from parameter_sync import namespace
from parameter_sync.config.loading import SyncConfig
from parameter_sync.config.provider import ProviderConfig
from parameter_sync.plan import Planner
from parameter_sync.resource.data_source import ParameterDataSource
from parameter_sync.resource.models import SecretBinding
from parameter_sync.tasks import params

DB = "/app/db/password"


@pytest.fixture
def env(monkeypatch, provider_client, parameter_resource, fake_secret_source, state_store):
    fake_secret_source.set("app/db", "s3cr3t")
    config = SyncConfig(
        provider=ProviderConfig(region="eu-west-2"),
        bindings=[SecretBinding(parameter_name=DB, pass_key="app/db", description="Database password")],
    )
    context = {
        'config': config,
        'provider': provider_client,
        'resource': parameter_resource,
        'data_source': ParameterDataSource(provider_client),
        'store': state_store,
        'planner': Planner(parameter_resource, state_store),
    }
    monkeypatch.setattr(params, "_context", lambda debug=False: context)
    return context


def run(task, *args, **kwargs):
    return task(Context(), *args, **kwargs)


def test_namespace_has_all_tasks():
    names = set(namespace.collections['params'].task_names)
    assert {'plan', 'apply', 'exists', 'read', 'delete', 'import', 'describe', 'list'} <= names


def test_plan_prints_changes_without_applying(env, parameter_store, capsys):
    run(params.plan)

    out = json.loads(capsys.readouterr().out)
    assert out["changes"][0]["action"] == "create"
    assert parameter_store.parameters == {}


def test_apply_then_plan_reports_no_changes(env, parameter_store, capsys):
    run(params.apply)
    assert json.loads(capsys.readouterr().out)["create"] == 1
    assert parameter_store.parameters[DB]["description"] == "Database password"

    run(params.plan)
    assert "No changes" in capsys.readouterr().err


def test_exists(env, capsys):
    with pytest.raises(SystemExit) as exc_info:
        run(params.exists, DB)
    assert exc_info.value.code == 1
    assert json.loads(capsys.readouterr().out) == {"parameter_name": DB, "exists": False}

    run(params.apply)
    capsys.readouterr()
    run(params.exists, DB)
    assert json.loads(capsys.readouterr().out)["exists"] is True


def test_read_refreshes_state(env, fake_secret_source, state_store, capsys):
    run(params.apply)
    before = state_store.get(DB)
    fake_secret_source.set("app/db", "rotated")
    capsys.readouterr()

    run(params.read, DB)

    assert json.loads(capsys.readouterr().out)["fingerprint"] != before.fingerprint
    assert state_store.get(DB).fingerprint != before.fingerprint


def test_read_of_unknown_binding_prints_guidance(env, capsys):
    with pytest.raises(SystemExit):
        run(params.read, DB)
    assert "State file error" in capsys.readouterr().err


def test_delete(env, parameter_store, state_store, capsys):
    run(params.apply)

    run(params.delete, DB)

    assert DB not in parameter_store.parameters
    assert state_store.names() == []


def test_delete_missing_parameter_fails(env, capsys):
    with pytest.raises(SystemExit):
        run(params.delete, DB)
    assert "not found in Parameter Store" in capsys.readouterr().err


def test_import_uses_declared_pass_key(env, parameter_store, state_store, capsys):
    parameter_store.put(DB, "s3cr3t", description="Database password")

    run(params.import_parameter, DB)

    binding = state_store.get(DB)
    assert binding.pass_key == "app/db"
    assert binding.arn == "arn:aws:ssm:eu-west-2:123456789012:parameter/app/db/password"
    assert not env['planner'].plan(env['config'].bindings).has_changes


def test_import_missing_parameter_fails(env, state_store, capsys):
    with pytest.raises(SystemExit):
        run(params.import_parameter, DB)
    assert state_store.names() == []


def test_import_requires_pass_key(env, parameter_store, capsys):
    parameter_store.put("/undeclared", "x")
    with pytest.raises(SystemExit):
        run(params.import_parameter, "/undeclared")
    assert "No pass_key" in capsys.readouterr().err


def test_describe(env, parameter_store, capsys):
    parameter_store.put("/other/param", "value", type="String")

    run(params.describe, "/other/param")

    out = json.loads(capsys.readouterr().out)
    assert out == {
        "id": "/other/param",
        "parameter_name": "/other/param",
        "type": "String",
        "arn": "arn:aws:ssm:eu-west-2:123456789012:parameter/other/param",
    }


def test_list_marks_managed_parameters(env, parameter_store, capsys):
    run(params.apply)
    parameter_store.put("/app/other", "x")
    capsys.readouterr()

    run(params.list_parameters, path="/app")

    rows = {row["name"]: row["managed"] for row in json.loads(capsys.readouterr().out)}
    assert rows == {DB: True, "/app/other": False}
