"""Container for the gdir master secret."""

import ctypes
import hmac
import os
import warnings
from typing import Self

# Bytes of randomness behind a generated secret (hex-encoded to twice that).
GENERATED_SECRET_SIZE = 64


def _zero(buffer: bytearray) -> None:
    if len(buffer) == 0:
        return
    try:
        address = ctypes.addressof((ctypes.c_char * len(buffer)).from_buffer(buffer))
        ctypes.memset(address, 0, len(buffer))
    except (TypeError, ValueError) as exc:
        warnings.warn(f"ctypes.memset failed, using fallback: {exc}", RuntimeWarning)
        for i in range(len(buffer)):
            buffer[i] = 0


class SecretKey:
    """
    Opaque master secret.

    The value is used verbatim as key material for record encryption and
    record path derivation. The buffer is zeroed on ``clear()``.
    """

    __slots__ = ("_data", "_cleared")

    def __init__(self, data: bytes | bytearray) -> None:
        if len(data) == 0:
            msg = "secret must not be empty"
            raise ValueError(msg)
        self._data = bytearray(data)
        self._cleared = False

    def __del__(self) -> None:
        # __init__ may have raised before the buffer existed
        if hasattr(self, "_data"):
            self.clear()

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *_: object) -> None:
        self.clear()

    @classmethod
    def from_string(cls, value: str) -> Self:
        """Build from the operator-facing text form (e.g. a hex string)."""
        encoded = bytearray(value.strip(), "utf-8")
        try:
            return cls(encoded)
        finally:
            _zero(encoded)

    @classmethod
    def generate(cls, size: int = GENERATED_SECRET_SIZE) -> Self:
        """Create a random secret, hex-encoded like the operator would enter it."""
        raw = os.urandom(size)
        return cls(raw.hex().encode("ascii"))

    def clear(self) -> None:
        """Zero the buffer. Idempotent."""
        if self._cleared:
            return
        _zero(self._data)
        self._cleared = True

    @property
    def is_cleared(self) -> bool:
        return self._cleared

    def __bytes__(self) -> bytes:
        self._check_cleared()
        return bytes(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        if self._cleared:
            return "SecretKey(<cleared>)"
        return f"SecretKey(<{len(self._data)} bytes>)"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SecretKey):
            return NotImplemented
        if self._cleared or other._cleared:
            return False
        return hmac.compare_digest(self._data, other._data)

    def __hash__(self) -> int:
        raise TypeError("SecretKey is not hashable")

    def reveal(self) -> str:
        """Text form, for writing the secret back into operator config."""
        self._check_cleared()
        return self._data.decode("utf-8")

    def _check_cleared(self) -> None:
        if self._cleared:
            raise RuntimeError("SecretKey has been cleared")
