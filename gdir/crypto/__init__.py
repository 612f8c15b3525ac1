"""
Cryptographic operations for gdir.

This module provides:
- The master secret container
- AES-256-GCM record encryption with the record kind as associated data
- Deterministic record path derivation
"""

from gdir.crypto.record_cipher import (
    NONCE_SIZE,
    TAG_SIZE,
    decrypt_record,
    derive_record_name,
    encrypt_record,
)
from gdir.crypto.secret_key import SecretKey

__all__ = [
    "SecretKey",
    "NONCE_SIZE",
    "TAG_SIZE",
    "encrypt_record",
    "decrypt_record",
    "derive_record_name",
]
