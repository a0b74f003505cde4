"""
Secret fingerprints.

A fingerprint is a scrypt digest of a secret's plaintext. It goes into the
local state file in place of the secret, so that a change to the secret in the
password store can be noticed between runs without keeping the secret itself.
The same plaintext and salt always give the same fingerprint.
"""

import hmac
import os

from cryptography.hazmat.primitives.kdf.scrypt import Scrypt

SALT_BYTES = 16


class Fingerprinter:
    """Derives hex scrypt fingerprints from plaintext secrets."""

    def __init__(self, n: int = 2 ** 14, r: int = 8, p: int = 1, length: int = 32):
        self.n = n
        self.r = r
        self.p = p
        self.length = length

    @staticmethod
    def new_salt() -> str:
        """Generate a random salt, hex encoded for storage."""
        return os.urandom(SALT_BYTES).hex()

    def compute(self, plaintext: bytes, salt: str) -> str:
        """Compute the fingerprint of plaintext with a stored salt.

        Args:
            plaintext: Secret bytes of any length
            salt: Hex salt as returned by new_salt()

        Returns:
            Hex digest
        """
        kdf = Scrypt(salt=bytes.fromhex(salt), length=self.length, n=self.n, r=self.r, p=self.p)
        return kdf.derive(plaintext).hex()

    def matches(self, plaintext: bytes, fingerprint: str, salt: str) -> bool:
        """Check whether plaintext has the given fingerprint."""
        return hmac.compare_digest(self.compute(plaintext, salt), fingerprint)
