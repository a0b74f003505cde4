"""
`pass` (the standard unix password manager) secret source.

Runs `pass <key>` and returns its standard output as the secret.
"""

import logging
import os
import subprocess
from typing import Optional

from .interface import SecretSource
from ..exceptions import SecretRetrievalError

logger = logging.getLogger(__name__)

PASSWORD_STORE_DIR_ENV = "PASSWORD_STORE_DIR"


def trim_line_terminator(output: bytes) -> bytes:
    """Remove exactly one trailing line terminator ("\\n" or "\\r\\n")."""
    if output.endswith(b"\r\n"):
        return output[:-2]
    if output.endswith(b"\n"):
        return output[:-1]
    return output


class PassSecretSource(SecretSource):
    """Secret source backed by the `pass` command line tool."""

    def __init__(self, command: Optional[str] = None):
        """Initialize the source.

        Args:
            command: Executable to run; defaults to PASS_COMMAND or `pass`
        """
        self.command = command or os.getenv("PASS_COMMAND", "pass")

    @property
    def source_type(self) -> str:
        return "pass"

    def _build_env(self, location: str) -> Optional[dict]:
        if not location:
            return None
        env = os.environ.copy()
        env[PASSWORD_STORE_DIR_ENV] = location
        return env

    def fetch(self, location: str, key: str) -> bytes:
        logger.debug(f"Fetching '{key}' from `{self.command}` '{location}'")
        try:
            result = subprocess.run(
                [self.command, key],
                capture_output=True, env=self._build_env(location), check=False
            )
        except OSError as e:
            raise SecretRetrievalError(
                f"Could not start `{self.command}`", pass_key=key, stderr=str(e)
            ) from e

        if result.returncode != 0:
            stderr = result.stderr.decode("utf-8", errors="replace")
            raise SecretRetrievalError(
                f"`{self.command}` exited with status {result.returncode}",
                pass_key=key, stderr=stderr
            )

        return trim_line_terminator(result.stdout)
