import pytest

from gdir.crypto.secret_key import GENERATED_SECRET_SIZE, SecretKey


def test_secret_key_rejects_empty_value() -> None:
    with pytest.raises(ValueError, match="secret must not be empty"):
        SecretKey(b"")


def test_secret_key_from_string_strips_whitespace() -> None:
    key = SecretKey.from_string("  abc123\n")

    assert bytes(key) == b"abc123"
    assert key.reveal() == "abc123"


def test_secret_key_generate_is_hex_of_requested_size() -> None:
    key = SecretKey.generate()

    text = key.reveal()
    assert len(text) == GENERATED_SECRET_SIZE * 2
    int(text, 16)


def test_secret_key_generate_is_random() -> None:
    assert SecretKey.generate() != SecretKey.generate()


def test_secret_key_repr_hides_value() -> None:
    key = SecretKey(b"topsecret")

    assert "topsecret" not in repr(key)
    assert repr(key) == "SecretKey(<9 bytes>)"


def test_secret_key_clear_zeroes_and_blocks_access() -> None:
    key = SecretKey(b"topsecret")

    key.clear()

    assert key.is_cleared
    assert repr(key) == "SecretKey(<cleared>)"
    with pytest.raises(RuntimeError, match="has been cleared"):
        bytes(key)


def test_secret_key_clear_is_idempotent() -> None:
    key = SecretKey(b"topsecret")

    key.clear()
    key.clear()

    assert key.is_cleared


def test_secret_key_context_manager_clears() -> None:
    with SecretKey(b"topsecret") as key:
        assert bytes(key) == b"topsecret"

    assert key.is_cleared


def test_secret_key_equality() -> None:
    assert SecretKey(b"a") == SecretKey(b"a")
    assert SecretKey(b"a") != SecretKey(b"b")


def test_secret_key_cleared_never_equal() -> None:
    first = SecretKey(b"a")
    second = SecretKey(b"a")

    first.clear()

    assert first != second


def test_secret_key_is_not_hashable() -> None:
    with pytest.raises(TypeError, match="not hashable"):
        hash(SecretKey(b"a"))
