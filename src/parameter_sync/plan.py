"""
Planning and applying changes.

The planner refreshes every binding in the state file (exists, then read),
compares the result with what parameter-sync.yaml declares and decides what to
do with each parameter. A binding needs an update when its declared fields
changed, when the value in `pass` no longer has the stored fingerprint, or when
the parameter was modified in Parameter Store since the last run.
"""

import logging
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel

from .resource.lifecycle import ParameterFromPassResource
from .resource.models import BindingState, SecretBinding
from .state import StateManifest, StateStore

logger = logging.getLogger(__name__)


class Action(str, Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    NOOP = "noop"


class PlannedChange(BaseModel):
    """What will happen to one parameter, and why."""
    action: Action
    parameter_name: str
    reasons: List[str] = []
    desired: Optional[SecretBinding] = None
    current: Optional[SecretBinding] = None


class Plan(BaseModel):
    changes: List[PlannedChange] = []

    @property
    def has_changes(self) -> bool:
        return any(change.action != Action.NOOP for change in self.changes)

    def summary(self) -> Dict[str, int]:
        counts = {action.value: 0 for action in Action}
        for change in self.changes:
            counts[change.action.value] += 1
        return counts


def _same_text(a: Optional[str], b: Optional[str]) -> bool:
    return (a or "") == (b or "")


def diff_reasons(desired: SecretBinding, prior: SecretBinding, current: SecretBinding) -> List[str]:
    """Reasons desired differs from current, given the binding as last persisted."""
    reasons = []
    if desired.pass_key != current.pass_key:
        reasons.append("pass_key changed")
    if not _same_text(desired.pass_dir, current.pass_dir):
        reasons.append("pass_dir changed")
    if not _same_text(desired.description, current.description):
        reasons.append("description changed")
    if desired.key_id and desired.key_id != current.key_id:
        reasons.append("key_id changed")
    if prior.fingerprint and current.fingerprint != prior.fingerprint:
        reasons.append("secret changed in pass")
    if prior.last_modified and current.last_modified != prior.last_modified:
        reasons.append("parameter modified outside parameter-sync")
    return reasons


class Planner:
    """Builds and applies plans for a set of declared bindings."""

    def __init__(self, resource: ParameterFromPassResource, store: StateStore):
        self.resource = resource
        self.store = store

    def refresh(self, prior: SecretBinding) -> SecretBinding:
        """Exists, then read; an absent parameter comes back with an empty id."""
        name = prior.id or prior.parameter_name
        if not self.resource.exists(name):
            logger.info(f"SSM Parameter {name!r} no longer exists")
            return prior.model_copy(update={"id": ""})
        return self.resource.read(prior)

    def plan(self, declared: List[SecretBinding], state: Optional[StateManifest] = None) -> Plan:
        state = state if state is not None else self.store.load()
        changes = []

        for desired in declared:
            prior = state.bindings.get(desired.parameter_name)
            if prior is None:
                changes.append(PlannedChange(
                    action=Action.CREATE, parameter_name=desired.parameter_name,
                    reasons=["not in state"], desired=desired,
                ))
                continue

            current = self.refresh(prior)
            logger.debug(f"Refreshed {desired.parameter_name}: {current.state.value}")
            if current.state == BindingState.ABSENT:
                changes.append(PlannedChange(
                    action=Action.CREATE, parameter_name=desired.parameter_name,
                    reasons=["missing from Parameter Store"], desired=desired, current=current,
                ))
                continue

            reasons = diff_reasons(desired, prior, current)
            changes.append(PlannedChange(
                action=Action.UPDATE if reasons else Action.NOOP,
                parameter_name=desired.parameter_name,
                reasons=reasons, desired=desired, current=current,
            ))

        declared_names = {binding.parameter_name for binding in declared}
        for name in sorted(set(state.bindings) - declared_names):
            changes.append(PlannedChange(
                action=Action.DELETE, parameter_name=name,
                reasons=["no longer declared"], current=state.bindings[name],
            ))

        return Plan(changes=changes)

    def apply(self, plan: Plan) -> List[SecretBinding]:
        """Carry out a plan, persisting state after every parameter.

        Any error stops the run; parameters already handled stay persisted.
        """
        applied = []
        for change in plan.changes:
            logger.info(f"{change.action.value}: {change.parameter_name}")

            if change.action == Action.DELETE:
                if self.resource.exists(change.parameter_name):
                    self.resource.delete(change.parameter_name)
                self.store.remove(change.parameter_name)
                continue

            if change.action == Action.NOOP:
                binding = change.current
            elif change.action == Action.CREATE:
                binding = self.resource.create(self._carry_salt(change.desired, change.current), prior=None)
            else:
                binding = self.resource.update(self._carry_salt(change.desired, change.current),
                                               prior=change.current)

            self.store.put(binding)
            applied.append(binding)
        return applied

    @staticmethod
    def _carry_salt(desired: SecretBinding, current: Optional[SecretBinding]) -> SecretBinding:
        if current is None or not current.fingerprint_salt:
            return desired
        return desired.model_copy(update={"fingerprint_salt": current.fingerprint_salt})
