"""Parameter sync tasks.

Simple task definitions that handle errors with built-in guidance and
delegate to the planner and the parameter_from_pass resource."""

import json
import sys

from botocore.exceptions import BotoCoreError, ClientError
from invoke import task

from . import setup_logging
from ..exceptions import ParameterSyncException


def _handle_error(e: Exception):
    """Print guidance for our own errors, the raw message for AWS ones, and exit."""
    if isinstance(e, ParameterSyncException):
        print(e.guidance, file=sys.stderr)
    else:
        print(f"❌ AWS error: {e}", file=sys.stderr)
    sys.exit(1)


def _context(debug=False):
    """Load config and state and build the resource every task works with."""
    from ..config import load_config
    from ..plan import Planner
    from ..resource import ParameterFromPassResource, ParameterDataSource
    from ..secrets import PassSecretSource
    from ..state import StateStore

    setup_logging(debug)
    config = load_config()
    provider = config.provider.client()
    resource = ParameterFromPassResource(provider, PassSecretSource())
    store = StateStore()
    return {
        'config': config,
        'provider': provider,
        'resource': resource,
        'data_source': ParameterDataSource(provider),
        'store': store,
        'planner': Planner(resource, store),
    }


@task(help={'debug': 'Enable debug logging'})
def plan(ctx, debug=False):
    """
    Show what apply would change, without changing anything.

    Examples:
        parameter-sync params.plan
    """
    try:
        env = _context(debug)
        result = env['planner'].plan(env['config'].bindings)
    except (ParameterSyncException, ClientError, BotoCoreError) as e:
        _handle_error(e)

    print(result.model_dump_json(indent=2, exclude_none=True))
    if not result.has_changes:
        print("✅ No changes. Parameters match parameter-sync.yaml.", file=sys.stderr)
    else:
        print(json.dumps(result.summary()), file=sys.stderr)


@task(help={'debug': 'Enable debug logging'})
def apply(ctx, debug=False):
    """
    Create, update and delete parameters so they match parameter-sync.yaml.

    Examples:
        parameter-sync params.apply
        LOG_LEVEL=INFO parameter-sync params.apply
    """
    try:
        env = _context(debug)
        result = env['planner'].plan(env['config'].bindings)
        env['planner'].apply(result)
    except (ParameterSyncException, ClientError, BotoCoreError) as e:
        _handle_error(e)

    print(json.dumps(result.summary(), indent=2))


@task(help={
    'parameter_name': 'Name of the parameter to check',
    'debug': 'Enable debug logging'
})
def exists(ctx, parameter_name, debug=False):
    """
    Check whether a parameter exists, without decrypting it.

    Examples:
        parameter-sync params.exists /app/db/password
    """
    try:
        env = _context(debug)
        found = env['resource'].exists(parameter_name)
    except (ParameterSyncException, ClientError, BotoCoreError) as e:
        _handle_error(e)

    print(json.dumps({'parameter_name': parameter_name, 'exists': found}, indent=2))
    if not found:
        sys.exit(1)


@task(help={
    'parameter_name': 'Name of a parameter in the state file',
    'debug': 'Enable debug logging'
})
def read(ctx, parameter_name, debug=False):
    """
    Refresh one binding from `pass` and Parameter Store and save it to state.

    Examples:
        parameter-sync params.read /app/db/password
    """
    from ..exceptions import StateError

    try:
        env = _context(debug)
        prior = env['store'].get(parameter_name)
        if prior is None:
            raise StateError(f"No binding for {parameter_name!r} in state", state_path=str(env['store'].path))
        binding = env['resource'].read(prior)
        env['store'].put(binding)
    except (ParameterSyncException, ClientError, BotoCoreError) as e:
        _handle_error(e)

    print(binding.model_dump_json(indent=2, exclude_none=True))
    if not binding.id:
        sys.exit(1)


@task(help={
    'parameter_name': 'Name of the parameter to delete',
    'debug': 'Enable debug logging'
})
def delete(ctx, parameter_name, debug=False):
    """
    Delete a parameter from Parameter Store and from state.

    Examples:
        parameter-sync params.delete /app/db/password
    """
    try:
        env = _context(debug)
        env['resource'].delete(parameter_name)
        env['store'].remove(parameter_name)
    except (ParameterSyncException, ClientError, BotoCoreError) as e:
        _handle_error(e)

    print(json.dumps({'parameter_name': parameter_name, 'deleted': True}, indent=2))


@task(name='import', help={
    'parameter_name': 'Name of an existing parameter',
    'pass_key': 'Key in `pass` (defaults to the one declared in parameter-sync.yaml)',
    'pass_dir': 'Password store directory (defaults to the declared one)',
    'debug': 'Enable debug logging'
})
def import_parameter(ctx, parameter_name, pass_key=None, pass_dir=None, debug=False):
    """
    Start managing an existing parameter.

    Examples:
        parameter-sync params.import /app/db/password
        parameter-sync params.import /app/db/password --pass-key=app/db
    """
    from ..exceptions import ConfigurationError, ParameterNotFoundException

    try:
        env = _context(debug)
        declared = env['config'].get_binding(parameter_name)
        pass_key = pass_key or (declared.pass_key if declared else None)
        if not pass_key:
            raise ConfigurationError(f"No pass_key given or declared for {parameter_name!r}")
        if pass_dir is None:
            pass_dir = declared.pass_dir if declared else ""

        binding = env['resource'].import_state(parameter_name, pass_key, pass_dir)
        binding = env['resource'].read(binding)
        if not binding.id:
            raise ParameterNotFoundException(f"Parameter {parameter_name!r} not found", parameter_name=parameter_name)
        env['store'].put(binding)
    except (ParameterSyncException, ClientError, BotoCoreError) as e:
        _handle_error(e)

    print(binding.model_dump_json(indent=2, exclude_none=True))


@task(help={
    'parameter_name': 'Name of the parameter to look up',
    'debug': 'Enable debug logging'
})
def describe(ctx, parameter_name, debug=False):
    """
    Show name, type and ARN of any parameter (the value is never fetched).

    Examples:
        parameter-sync params.describe /app/db/password
    """
    try:
        env = _context(debug)
        info = env['data_source'].read(parameter_name)
    except (ParameterSyncException, ClientError, BotoCoreError) as e:
        _handle_error(e)

    print(info.model_dump_json(indent=2))


@task(name='list', help={
    'path': 'Only list parameters under this path (e.g., /app)',
    'debug': 'Enable debug logging'
})
def list_parameters(ctx, path=None, debug=False):
    """
    List parameter metadata, marking the ones managed by parameter-sync.

    Examples:
        parameter-sync params.list --path=/app
    """
    try:
        env = _context(debug)
        parameters = env['provider'].ssm.list_parameters(path)
        managed = set(env['store'].names())
    except (ParameterSyncException, ClientError, BotoCoreError) as e:
        _handle_error(e)

    rows = [
        {**p.model_dump(mode='json', exclude_none=True), 'managed': p.name in managed}
        for p in parameters
    ]
    print(json.dumps(rows, indent=2))
