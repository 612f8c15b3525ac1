import hashlib
import json

import pytest

from gdir.crypto.record_cipher import (
    NONCE_SIZE,
    TAG_SIZE,
    decrypt_record,
    derive_record_name,
    encrypt_record,
)
from gdir.crypto.secret_key import SecretKey
from gdir.exceptions import AuthenticationError


def test_decrypt_record_returns_original_user_document(secret: SecretKey) -> None:
    """Test decryption of a record encrypted with the user kind."""
    plaintext = json.dumps({"name": "alice"}).encode()

    record = encrypt_record(secret, "user", plaintext)

    assert decrypt_record(secret, "user", record) == plaintext


def test_decrypt_record_handles_empty_plaintext(secret: SecretKey) -> None:
    record = encrypt_record(secret, "account", b"")

    assert decrypt_record(secret, "account", record) == b""


def test_encrypt_record_layout_is_nonce_ciphertext_tag(secret: SecretKey) -> None:
    plaintext = b"x" * 37

    record = encrypt_record(secret, "account", plaintext)

    assert len(record) == NONCE_SIZE + len(plaintext) + TAG_SIZE


def test_encrypt_record_uses_fresh_nonce_each_call(secret: SecretKey) -> None:
    first = encrypt_record(secret, "user", b"same")
    second = encrypt_record(secret, "user", b"same")

    assert first[:NONCE_SIZE] != second[:NONCE_SIZE]
    assert first != second


def test_encrypt_record_accepts_raw_bytes_secret() -> None:
    record = encrypt_record(b"raw-secret", "user", b"payload")

    assert decrypt_record(SecretKey(b"raw-secret"), "user", record) == b"payload"


def test_decrypt_record_raises_on_wrong_secret(secret: SecretKey) -> None:
    record = encrypt_record(secret, "user", b"payload")

    with pytest.raises(AuthenticationError, match="Record authentication failed"):
        decrypt_record(SecretKey(b"another-secret"), "user", record)


def test_decrypt_record_raises_on_wrong_kind(secret: SecretKey) -> None:
    record = encrypt_record(secret, "user", b"payload")

    with pytest.raises(AuthenticationError) as exc_info:
        decrypt_record(secret, "account", record)

    assert exc_info.value.kind == "account"


def test_decrypt_record_kind_is_case_sensitive(secret: SecretKey) -> None:
    record = encrypt_record(secret, "user", b"payload")

    with pytest.raises(AuthenticationError):
        decrypt_record(secret, "User", record)


@pytest.mark.parametrize("position", [0, NONCE_SIZE, -1])
def test_decrypt_record_raises_on_flipped_bit(secret: SecretKey, position: int) -> None:
    record = bytearray(encrypt_record(secret, "user", b"payload"))
    record[position] ^= 0x01

    with pytest.raises(AuthenticationError):
        decrypt_record(secret, "user", bytes(record))


def test_decrypt_record_raises_on_truncated_record(secret: SecretKey) -> None:
    with pytest.raises(AuthenticationError, match="Record too short"):
        decrypt_record(secret, "user", b"\x00" * (NONCE_SIZE + TAG_SIZE - 1))


def test_derive_record_name_is_deterministic(secret: SecretKey) -> None:
    assert derive_record_name(secret, "alice") == derive_record_name(secret, "alice")


def test_derive_record_name_is_sha256_hex_of_secret_and_name() -> None:
    expected = hashlib.sha256(b"s3cretalice").hexdigest()

    assert derive_record_name(SecretKey(b"s3cret"), "alice") == expected
    assert len(expected) == 64


def test_derive_record_name_differs_per_name(secret: SecretKey) -> None:
    names = {derive_record_name(secret, n) for n in ("alice", "bob", "Alice", "alice ")}

    assert len(names) == 4


def test_derive_record_name_differs_per_secret() -> None:
    assert derive_record_name(b"one", "alice") != derive_record_name(b"two", "alice")
