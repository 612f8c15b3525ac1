from gdir.exceptions import (
    AuthenticationError,
    ConflictError,
    CryptoError,
    DeployError,
    GdirError,
    NotFoundError,
    RecordNotFoundError,
    RepositoryError,
    UserNotFoundError,
)


def test_gdir_error_str_without_context() -> None:
    error = GdirError("Something failed")

    assert str(error) == "Something failed"


def test_gdir_error_str_with_context() -> None:
    error = GdirError("Failed", path="/tmp/users", attempt=3)

    assert "Failed" in str(error)
    assert "path='/tmp/users'" in str(error)
    assert "attempt=3" in str(error)


def test_not_found_errors_share_base() -> None:
    assert isinstance(RecordNotFoundError("gone", path="users/abc"), NotFoundError)
    assert isinstance(UserNotFoundError("gone", name="alice"), NotFoundError)


def test_authentication_error_is_crypto_error() -> None:
    error = AuthenticationError("bad tag", kind="user")

    assert isinstance(error, CryptoError)
    assert error.kind == "user"


def test_repository_errors_carry_path_and_operation() -> None:
    error = DeployError("Failed to push", path="users", operation="push")

    assert isinstance(error, RepositoryError)
    assert error.path == "users"
    assert error.operation == "push"
    assert "operation='push'" in str(error)


def test_conflict_error_is_repository_error() -> None:
    assert isinstance(ConflictError("not a repo", path="x", operation="open"), RepositoryError)
