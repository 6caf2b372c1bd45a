"""Encryption of provider API keys at rest.

Tokens are ``hex(nonce):hex(tag):hex(ciphertext)`` produced by AES-256-GCM
with a fresh 16-byte nonce per call.
"""

import os
from functools import lru_cache

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from resume_enhancer.config import get_settings
from resume_enhancer.exceptions import (
    ConfigurationError,
    DecryptionFailedError,
    InvalidFormatError,
)

KEY_LENGTH = 32
NONCE_LENGTH = 16
TAG_LENGTH = 16


class CredentialVault:
    """Symmetric encrypt/decrypt of secrets with a single deployment key."""

    def __init__(self, key: bytes):
        if len(key) != KEY_LENGTH:
            raise ConfigurationError(
                f"ENCRYPTION_KEY must be exactly {KEY_LENGTH} bytes long. "
                f"Current length: {len(key)}"
            )
        self._aead = AESGCM(key)

    @classmethod
    def from_secret(cls, secret: str | None) -> "CredentialVault":
        """Build a vault from the configured key string."""
        if not secret:
            raise ConfigurationError(
                "ENCRYPTION_KEY environment variable is not set. "
                f"Please set a {KEY_LENGTH}-character encryption key."
            )
        return cls(secret.encode("utf-8"))

    def encrypt(self, secret: str) -> str:
        nonce = os.urandom(NONCE_LENGTH)
        sealed = self._aead.encrypt(nonce, secret.encode("utf-8"), None)
        ciphertext, tag = sealed[:-TAG_LENGTH], sealed[-TAG_LENGTH:]
        return f"{nonce.hex()}:{tag.hex()}:{ciphertext.hex()}"

    def decrypt(self, token: str) -> str:
        parts = token.split(":")
        if len(parts) != 3:
            raise InvalidFormatError()

        try:
            nonce, tag, ciphertext = (bytes.fromhex(part) for part in parts)
        except ValueError as e:
            raise InvalidFormatError() from e

        if len(nonce) != NONCE_LENGTH or len(tag) != TAG_LENGTH:
            raise InvalidFormatError()

        try:
            plaintext = self._aead.decrypt(nonce, ciphertext + tag, None)
        except InvalidTag as e:
            raise DecryptionFailedError() from e

        return plaintext.decode("utf-8")


@lru_cache
def get_vault() -> CredentialVault:
    """Get the process-wide vault; raises ConfigurationError if the key is unusable."""
    return CredentialVault.from_secret(get_settings().encryption_key)
