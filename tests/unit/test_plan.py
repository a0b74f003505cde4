"""
Tests for planning and applying changes against the in-memory parameter store.
"""

import pytest

from parameter_sync.exceptions import SecretRetrievalError
from parameter_sync.plan import Action, Planner, diff_reasons
from parameter_sync.resource.models import SecretBinding

DB = "/app/db/password"
API = "/app/api/token"


def declare(name=DB, pass_key="app/db", **overrides):
    return SecretBinding(parameter_name=name, pass_key=pass_key, **overrides)


@pytest.fixture
def planner(parameter_resource, state_store, fake_secret_source):
    fake_secret_source.set("app/db", "s3cr3t")
    fake_secret_source.set("app/api", "t0ken")
    return Planner(parameter_resource, state_store)


def plan_and_apply(planner, declared):
    result = planner.plan(declared)
    planner.apply(result)
    return result


def actions(result):
    return [(change.action, change.parameter_name) for change in result.changes]


class TestPlan:

    def test_new_binding_is_created(self, planner, parameter_store, state_store):
        result = planner.plan([declare()])

        assert actions(result) == [(Action.CREATE, DB)]
        assert result.changes[0].reasons == ["not in state"]
        assert result.has_changes
        assert parameter_store.parameters == {}

        applied = planner.apply(result)

        assert parameter_store.parameters[DB]["value"] == "s3cr3t"
        assert state_store.get(DB) == applied[0]
        assert applied[0].arn == "arn:aws:ssm:eu-west-2:123456789012:parameter/app/db/password"

    def test_second_plan_is_noop(self, planner):
        plan_and_apply(planner, [declare()])

        result = planner.plan([declare()])

        assert actions(result) == [(Action.NOOP, DB)]
        assert not result.has_changes
        assert result.summary() == {"create": 0, "update": 0, "delete": 0, "noop": 1}

    def test_rotated_secret_is_updated(self, planner, fake_secret_source, parameter_store, state_store):
        plan_and_apply(planner, [declare()])
        salt = state_store.get(DB).fingerprint_salt
        fake_secret_source.set("app/db", "rotated")

        result = plan_and_apply(planner, [declare()])

        assert actions(result) == [(Action.UPDATE, DB)]
        assert result.changes[0].reasons == ["secret changed in pass"]
        assert parameter_store.parameters[DB]["value"] == "rotated"
        assert state_store.get(DB).fingerprint_salt == salt
        assert not planner.plan([declare()]).has_changes

    def test_remote_modification_is_reverted(self, planner, parameter_store):
        plan_and_apply(planner, [declare()])
        parameter_store.put(DB, "changed in the console")

        result = plan_and_apply(planner, [declare()])

        assert result.changes[0].reasons == ["parameter modified outside parameter-sync"]
        assert parameter_store.parameters[DB]["value"] == "s3cr3t"
        assert not planner.plan([declare()]).has_changes

    def test_description_change(self, planner, parameter_store):
        plan_and_apply(planner, [declare(description="old")])

        result = plan_and_apply(planner, [declare(description="new")])

        assert result.changes[0].reasons == ["description changed"]
        assert parameter_store.parameters[DB]["description"] == "new"

    def test_pass_key_change(self, planner, fake_secret_source, parameter_store):
        plan_and_apply(planner, [declare()])
        fake_secret_source.set("app/db-v2", "s3cr3t")

        result = plan_and_apply(planner, [declare(pass_key="app/db-v2")])

        assert result.changes[0].reasons == ["pass_key changed"]
        assert parameter_store.parameters[DB]["value"] == "s3cr3t"

    def test_parameter_deleted_remotely_is_recreated(self, planner, parameter_store):
        plan_and_apply(planner, [declare()])
        del parameter_store.parameters[DB]

        result = plan_and_apply(planner, [declare()])

        assert actions(result) == [(Action.CREATE, DB)]
        assert result.changes[0].reasons == ["missing from Parameter Store"]
        assert parameter_store.parameters[DB]["value"] == "s3cr3t"

    def test_undeclared_binding_is_deleted(self, planner, parameter_store, state_store):
        plan_and_apply(planner, [declare(), declare(API, "app/api")])

        result = plan_and_apply(planner, [declare()])

        assert actions(result) == [(Action.NOOP, DB), (Action.DELETE, API)]
        assert result.changes[1].reasons == ["no longer declared"]
        assert API not in parameter_store.parameters
        assert state_store.names() == [DB]

    def test_renamed_binding_is_recreated_under_new_name(self, planner, parameter_store, state_store):
        renamed = "/app/database/password"
        plan_and_apply(planner, [declare()])

        result = planner.plan([declare(renamed)])

        assert actions(result) == [(Action.CREATE, renamed), (Action.DELETE, DB)]
        assert not any(change.action == Action.UPDATE for change in result.changes)

        planner.apply(result)

        assert DB not in parameter_store.parameters
        assert parameter_store.parameters[renamed]["value"] == "s3cr3t"
        assert state_store.names() == [renamed]
        assert state_store.get(renamed).arn == \
            "arn:aws:ssm:eu-west-2:123456789012:parameter/app/database/password"

    def test_delete_of_already_missing_parameter(self, planner, parameter_store, state_store):
        plan_and_apply(planner, [declare()])
        del parameter_store.parameters[DB]

        plan_and_apply(planner, [])

        assert state_store.names() == []

    def test_apply_stops_at_first_error(self, planner, fake_secret_source, parameter_store, state_store):
        fake_secret_source.fail("app/api", "gpg: decryption failed: No secret key")
        result = planner.plan([declare(), declare(API, "app/api")])

        with pytest.raises(SecretRetrievalError):
            planner.apply(result)

        assert state_store.names() == [DB]
        assert API not in parameter_store.parameters


class TestDiffReasons:

    def test_default_key_id_is_not_drift(self):
        current = declare(id=DB, key_id="alias/aws/ssm")
        assert diff_reasons(declare(), current, current) == []

    def test_declared_key_id_change(self):
        current = declare(id=DB, key_id="alias/aws/ssm")
        assert diff_reasons(declare(key_id="alias/custom"), current, current) == ["key_id changed"]

    def test_missing_and_empty_description_are_equal(self):
        current = declare(id=DB, description="")
        assert diff_reasons(declare(), current, current) == []

    def test_pass_dir_change(self):
        current = declare(id=DB)
        assert diff_reasons(declare(pass_dir="/srv/store"), current, current) == ["pass_dir changed"]
