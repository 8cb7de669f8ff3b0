"""Fernet-based blob encryption for safety data at rest.

Contacts, emergency history and the user profile are stored as opaque
blobs; when an encryption key is configured each blob is sealed with
Fernet before it reaches SQLite.
"""

from __future__ import annotations

import logging

from cryptography.fernet import Fernet, InvalidToken

logger = logging.getLogger(__name__)


class EncryptionError(Exception):
    """Raised when encryption/decryption fails."""


class BlobEncryptor:
    """Encrypts and decrypts raw byte blobs using Fernet symmetric encryption.

    Usage::

        encryptor = BlobEncryptor(key="...")
        token = encryptor.encrypt(b'[{"name": "Asha"}]')
        plain = encryptor.decrypt(token)
    """

    def __init__(self, key: str) -> None:
        """Initialize with a Fernet key.

        Args:
            key: A valid Fernet key string. Generate with
                 :meth:`generate_key`.

        Raises:
            EncryptionError: If the key is empty or invalid.
        """
        if not key or not key.strip():
            raise EncryptionError("Encryption key must not be empty")
        try:
            self._fernet = Fernet(key.encode() if isinstance(key, str) else key)
        except (ValueError, TypeError) as exc:
            raise EncryptionError(f"Invalid encryption key: {exc}") from exc

    def encrypt(self, data: bytes) -> bytes:
        """Encrypt a byte string to a Fernet token.

        Raises:
            EncryptionError: If encryption fails.
        """
        try:
            return self._fernet.encrypt(data)
        except TypeError as exc:
            raise EncryptionError(f"Encryption failed: {exc}") from exc

    def decrypt(self, token: bytes) -> bytes:
        """Decrypt a Fernet token back to the original bytes.

        Raises:
            EncryptionError: If the token is invalid or the key is wrong.
        """
        try:
            return self._fernet.decrypt(token)
        except InvalidToken as exc:
            raise EncryptionError("Decryption failed: invalid token or wrong key") from exc
        except TypeError as exc:
            raise EncryptionError(f"Decryption failed: {exc}") from exc

    @staticmethod
    def generate_key() -> str:
        """Generate a new Fernet key.

        Returns:
            A URL-safe base64-encoded 32-byte key as a string.
        """
        return Fernet.generate_key().decode("utf-8")
