"""
gdir exception hierarchy.

All exceptions inherit from GdirError for easy catching.
"""

from typing import Any


class GdirError(Exception):
    """Base exception for all gdir errors."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        if self.context:
            ctx = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({ctx})"
        return self.message


class NotFoundError(GdirError):
    """Requested record does not exist."""


class RecordNotFoundError(NotFoundError):
    """No record file at the derived path."""

    def __init__(self, message: str, *, path: str) -> None:
        super().__init__(message, path=path)
        self.path = path


class UserNotFoundError(NotFoundError):
    """No user record for the given name."""

    def __init__(self, message: str, *, name: str) -> None:
        super().__init__(message, name=name)
        self.name = name


class CryptoError(GdirError):
    """Cryptographic operation failed."""


class AuthenticationError(CryptoError):
    """Record tag did not verify (wrong key, wrong kind, or corrupted bytes)."""

    def __init__(self, message: str, *, kind: str | None = None) -> None:
        super().__init__(message, kind=kind)
        self.kind = kind


class StorageError(GdirError):
    """Disk I/O failed for a reason other than a missing record."""

    def __init__(self, message: str, *, path: str) -> None:
        super().__init__(message, path=path)
        self.path = path


class RepositoryError(GdirError):
    """A git operation on a working copy failed."""

    def __init__(self, message: str, *, path: str, operation: str) -> None:
        super().__init__(message, path=path, operation=operation)
        self.path = path
        self.operation = operation


class ConflictError(RepositoryError):
    """Working directory is in a state reconciliation will not repair."""


class DeployError(RepositoryError):
    """Staging, committing or pushing a deploy failed."""


class AccessControlError(GdirError):
    """Access-control list operation rejected."""


class InvalidTransitionError(AccessControlError):
    """Command not allowed in the current access mode."""

    def __init__(self, message: str, *, mode: str, command: str) -> None:
        super().__init__(message, mode=mode, command=command)
        self.mode = mode
        self.command = command


class UnconfirmedChangesError(AccessControlError):
    """Access changes were requested but never confirmed."""
