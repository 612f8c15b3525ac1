from collections.abc import Callable
from pathlib import Path

import pytest

from gdir.config import GdirConfig, GdirContext
from gdir.crypto.secret_key import SecretKey

SECRET = b"0f3c9a7d2e5b8c1a4f6d9e2b7c0a3f5e8d1b4c7a0e3f6d9c2b5a8e1f4c7d0a3b"


@pytest.fixture
def secret() -> SecretKey:
    return SecretKey(SECRET)


@pytest.fixture
def make_context(tmp_path: Path, secret: SecretKey) -> Callable[..., GdirContext]:
    def _make(config: GdirConfig | None = None) -> GdirContext:
        return GdirContext(secret=secret, root=tmp_path / "workspace", config=config or GdirConfig())

    return _make


@pytest.fixture
def context(make_context: Callable[..., GdirContext]) -> GdirContext:
    return make_context()
