"""
Vault Encryption.

AES-256-GCM for vault item passwords.

Stored format (all parts standard base64):
    v1:<iv>:<tag>:<ciphertext>

The key comes from VAULT_MASTER_KEY and must decode to exactly 32 bytes,
either as 64 hex characters or as base64.
"""

import base64
import binascii
import os
import re

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from agencyhub.backend.core.config import get_settings
from agencyhub.backend.core.exceptions import ConfigurationError
from agencyhub.backend.core.logging import get_logger

logger = get_logger(__name__)

FORMAT_VERSION = "v1"
KEY_BYTES = 32
IV_BYTES = 12
TAG_BYTES = 16

_HEX_KEY = re.compile(r"^[0-9a-fA-F]{64}$")


class DecryptionError(Exception):
    """Raised when a stored secret cannot be decrypted."""


def parse_master_key(raw: str) -> bytes:
    """
    Decode a master key from hex or base64.

    Raises:
        ConfigurationError: If the key is missing or not 32 bytes.
    """
    value = (raw or "").strip()
    if not value:
        raise ConfigurationError("VAULT_MASTER_KEY is not set")

    if _HEX_KEY.match(value):
        key = bytes.fromhex(value)
    else:
        try:
            key = base64.b64decode(value, validate=True)
        except binascii.Error as e:
            raise ConfigurationError("VAULT_MASTER_KEY must be base64 or 64 hex characters") from e

    if len(key) != KEY_BYTES:
        raise ConfigurationError(
            f"VAULT_MASTER_KEY must decode to {KEY_BYTES} bytes, got {len(key)}"
        )
    return key


def generate_master_key() -> str:
    """Fresh base64 master key for VAULT_MASTER_KEY."""
    return base64.b64encode(os.urandom(KEY_BYTES)).decode("ascii")


def _key() -> bytes:
    return parse_master_key(get_settings().vault_master_key)


def encrypt_secret(plaintext: str, key: bytes | None = None) -> str:
    """Encrypt a secret into the versioned storage format."""
    iv = os.urandom(IV_BYTES)
    sealed = AESGCM(key or _key()).encrypt(iv, plaintext.encode("utf-8"), None)
    ciphertext, tag = sealed[:-TAG_BYTES], sealed[-TAG_BYTES:]
    return ":".join((
        FORMAT_VERSION,
        base64.b64encode(iv).decode("ascii"),
        base64.b64encode(tag).decode("ascii"),
        base64.b64encode(ciphertext).decode("ascii"),
    ))


def decrypt_secret(payload: str, key: bytes | None = None) -> str:
    """
    Decrypt a value produced by encrypt_secret.

    Raises:
        DecryptionError: Unknown version, malformed payload, or failed
            authentication (wrong key or tampered data).
    """
    parts = payload.split(":")
    if len(parts) != 4 or parts[0] != FORMAT_VERSION:
        raise DecryptionError("Unsupported ciphertext format")

    try:
        iv, tag, ciphertext = (base64.b64decode(part, validate=True) for part in parts[1:])
    except binascii.Error as e:
        raise DecryptionError("Malformed ciphertext") from e

    if len(iv) != IV_BYTES or len(tag) != TAG_BYTES:
        raise DecryptionError("Malformed ciphertext")

    try:
        plaintext = AESGCM(key or _key()).decrypt(iv, ciphertext + tag, None)
    except InvalidTag as e:
        logger.warning("Vault ciphertext failed authentication")
        raise DecryptionError("Ciphertext failed authentication") from e

    return plaintext.decode("utf-8")
