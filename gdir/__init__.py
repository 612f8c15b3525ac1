"""
gdir core.

Encrypted record storage, drive access-control lists and gist-backed
distribution for a self-hosted Google Drive index.

Example:
    ```python
    from pathlib import Path

    from gdir import GistCredentials, SecretKey, User, Workspace

    secret = SecretKey.generate()
    gist = GistCredentials(
        username="octocat",
        token="ghp_...",
        accounts_id="aaa",
        users_id="bbb",
        static_id="ccc",
    )
    workspace = Workspace(Path("."), secret, gist)
    workspace.reconcile_all()
    workspace.users.save(User(name="admin", password="hunter2"))
    workspace.deploy_all()
    ```
"""

from gdir.config import GdirConfig, GdirContext
from gdir.crypto.record_cipher import decrypt_record, derive_record_name, encrypt_record
from gdir.crypto.secret_key import SecretKey
from gdir.exceptions import (
    AccessControlError,
    AuthenticationError,
    ConflictError,
    CryptoError,
    DeployError,
    GdirError,
    InvalidTransitionError,
    NotFoundError,
    RecordNotFoundError,
    RepositoryError,
    StorageError,
    UnconfirmedChangesError,
    UserNotFoundError,
)
from gdir.models.access import AccessMode, AccessState
from gdir.models.user import User
from gdir.workspace import GistCredentials, Workspace

__version__ = "0.1.0"

__all__ = [
    # Entry points
    "Workspace",
    "GistCredentials",
    "GdirConfig",
    "GdirContext",
    # Crypto
    "SecretKey",
    "encrypt_record",
    "decrypt_record",
    "derive_record_name",
    # Models
    "User",
    "AccessMode",
    "AccessState",
    # Exceptions
    "GdirError",
    "NotFoundError",
    "RecordNotFoundError",
    "UserNotFoundError",
    "CryptoError",
    "AuthenticationError",
    "StorageError",
    "RepositoryError",
    "ConflictError",
    "DeployError",
    "AccessControlError",
    "InvalidTransitionError",
    "UnconfirmedChangesError",
]
