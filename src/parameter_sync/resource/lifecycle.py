"""
Lifecycle operations for a parameter synchronized from `pass`.

Each operation takes the binding as last persisted and returns the binding to
persist next; nothing here keeps state between calls. The secret itself only
passes through put() on its way to Parameter Store and through read() on its way
to the fingerprinter.

Drift is tracked with two fields the orchestrator compares between runs:

- `fingerprint`, a scrypt digest of the value in `pass`, recomputed on every read;
- `last_modified`, the parameter's LastModifiedDate from Parameter Store,
  read from metadata without decryption.
"""

import logging
from typing import Optional

from .arn import compose_parameter_arn
from .models import SecretBinding
from ..config.provider import ProviderClient
from ..exceptions import ParameterNotFoundException, SecretRetrievalError
from ..remote.models import SECURE_STRING
from ..secrets.fingerprint import Fingerprinter
from ..secrets.interface import SecretSource

logger = logging.getLogger(__name__)


class ParameterFromPassResource:
    """Create, read, update and delete an SSM parameter holding a `pass` secret."""

    def __init__(self, provider: ProviderClient, secret_source: SecretSource,
                 fingerprinter: Optional[Fingerprinter] = None):
        self.provider = provider
        self.secret_source = secret_source
        self.fingerprinter = fingerprinter or Fingerprinter()

    @property
    def store(self):
        return self.provider.ssm

    def _fetch_secret(self, binding: SecretBinding) -> bytes:
        return self.secret_source.fetch(binding.pass_dir, binding.pass_key)

    def _fetch_text(self, binding: SecretBinding) -> str:
        """Fetch the secret as the text Parameter Store will hold."""
        secret = self._fetch_secret(binding)
        try:
            return secret.decode("utf-8")
        except UnicodeDecodeError as e:
            raise SecretRetrievalError(
                f"Secret at '{binding.pass_key}' is not valid UTF-8 (invalid byte at position {e.start})",
                pass_key=binding.pass_key
            ) from None

    def exists(self, name: str) -> bool:
        """Check whether the parameter exists, without decrypting it."""
        try:
            self.store.get(name, with_decryption=False)
        except ParameterNotFoundException:
            return False
        return True

    def read(self, binding: SecretBinding) -> SecretBinding:
        """Refresh a binding from `pass` and from parameter metadata.

        The fingerprint is recomputed from the current value in `pass` using the
        binding's salt (a new salt is drawn the first time). If the parameter has
        gone from Parameter Store the returned binding has an empty id.
        """
        secret = self._fetch_secret(binding)
        salt = binding.fingerprint_salt or self.fingerprinter.new_salt()
        updates = {
            "fingerprint": self.fingerprinter.compute(secret, salt),
            "fingerprint_salt": salt,
        }

        name = binding.id or binding.parameter_name
        try:
            detail = self.store.describe(name)
        except ParameterNotFoundException:
            logger.warning(f"SSM Parameter {name!r} not found, removing from state")
            updates["id"] = ""
            return binding.model_copy(update=updates)

        updates.update({
            "parameter_name": detail.name,
            "key_id": detail.key_id,
            "description": detail.description,
            "last_modified": detail.last_modified.isoformat() if detail.last_modified else None,
            "arn": compose_parameter_arn(
                self.provider.partition, self.provider.region, self.provider.account_id, name
            ),
        })
        return binding.model_copy(update=updates)

    def put(self, binding: SecretBinding, prior: Optional[SecretBinding] = None) -> SecretBinding:
        """Write the value from `pass` to Parameter Store, then read back.

        Args:
            binding: Desired binding
            prior: Binding as last persisted; None when creating

        Returns:
            The refreshed binding
        """
        value = self._fetch_text(binding)

        description = None
        prior_description = prior.description if prior is not None else None
        if binding.description != prior_description:
            description = binding.description or ""

        logger.debug(f"Waiting for SSM Parameter {binding.parameter_name} to be updated")
        self.store.put(
            binding.parameter_name,
            value,
            type=SECURE_STRING,
            key_id=binding.key_id or None,
            description=description,
            overwrite=True,
        )

        return self.read(binding.model_copy(update={"id": binding.parameter_name}))

    create = put
    update = put

    def delete(self, name: str) -> None:
        """Delete the parameter. A parameter that is already gone is an error."""
        logger.info(f"Deleting SSM Parameter: {name}")
        self.store.delete(name)

    def import_state(self, parameter_name: str, pass_key: str, pass_dir: str = "") -> SecretBinding:
        """Adopt an existing parameter; call read() afterwards to fill in the rest."""
        return SecretBinding(id=parameter_name, parameter_name=parameter_name,
                             pass_key=pass_key, pass_dir=pass_dir)
