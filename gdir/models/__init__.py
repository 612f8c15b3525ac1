"""
Domain models for gdir.

These are immutable (frozen) dataclasses representing the core domain concepts.
"""

from gdir.models.access import (
    AccessCommand,
    AccessMode,
    AccessState,
    Append,
    Confirm,
    Convert,
    Disable,
    Promote,
    Remove,
    Replace,
)
from gdir.models.repository import (
    AuthorIdentity,
    DeployResult,
    ReconcileReport,
    RepositoryState,
)
from gdir.models.user import User

__all__ = [
    # Access control
    "AccessMode",
    "AccessState",
    "AccessCommand",
    "Confirm",
    "Append",
    "Remove",
    "Replace",
    "Convert",
    "Disable",
    "Promote",
    # Users
    "User",
    # Repository
    "AuthorIdentity",
    "RepositoryState",
    "ReconcileReport",
    "DeployResult",
]
