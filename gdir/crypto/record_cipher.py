"""
Authenticated encryption of kind-tagged records.

A record is ``nonce (12 bytes) || ciphertext || tag (16 bytes)``, produced by
AES-256-GCM with the record kind bound as associated data. There is no magic
header or version byte.
"""

import hashlib
import os

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from gdir.crypto.secret_key import SecretKey
from gdir.exceptions import AuthenticationError

NONCE_SIZE = 12
TAG_SIZE = 16


def _key_bytes(secret: SecretKey | bytes) -> bytes:
    return bytes(secret)


def _aead(secret: SecretKey | bytes) -> AESGCM:
    # The secret has arbitrary length; GCM wants exactly 32 bytes.
    return AESGCM(hashlib.sha256(_key_bytes(secret)).digest())


def encrypt_record(secret: SecretKey | bytes, kind: str, plaintext: bytes) -> bytes:
    """
    Encrypt a record under a fresh random nonce.

    Args:
        secret: Master secret.
        kind: Record kind, authenticated but not encrypted.
        plaintext: Payload bytes.

    Returns:
        ``nonce || ciphertext || tag``.
    """
    nonce = os.urandom(NONCE_SIZE)
    return nonce + _aead(secret).encrypt(nonce, plaintext, kind.encode("utf-8"))


def decrypt_record(secret: SecretKey | bytes, kind: str, record: bytes) -> bytes:
    """
    Verify and decrypt a record.

    Args:
        secret: Master secret.
        kind: Record kind the record must have been encrypted under.
        record: ``nonce || ciphertext || tag``.

    Returns:
        The original plaintext.

    Raises:
        AuthenticationError: If the record is truncated or the tag does not
            verify against ``secret`` and ``kind``.
    """
    if len(record) < NONCE_SIZE + TAG_SIZE:
        msg = f"Record too short: {len(record)} < {NONCE_SIZE + TAG_SIZE}"
        raise AuthenticationError(msg, kind=kind)

    nonce, sealed = record[:NONCE_SIZE], record[NONCE_SIZE:]
    try:
        return _aead(secret).decrypt(nonce, sealed, kind.encode("utf-8"))
    except InvalidTag as e:
        msg = "Record authentication failed, wrong secret or kind, or corrupted data"
        raise AuthenticationError(msg, kind=kind) from e


def derive_record_name(secret: SecretKey | bytes, name: str) -> str:
    """
    Deterministic storage name for a logical record name.

    SHA-256 over ``secret || name``, hex-encoded. Unsalted: the same secret
    and name always map to the same file.
    """
    digest = hashlib.sha256()
    digest.update(_key_bytes(secret))
    digest.update(name.encode("utf-8"))
    return digest.hexdigest()
