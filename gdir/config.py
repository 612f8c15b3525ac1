"""
gdir configuration and the context threaded through every component.
"""

from dataclasses import dataclass, field
from pathlib import Path

from gdir.crypto.secret_key import SecretKey


@dataclass(frozen=True, kw_only=True)
class GdirConfig:
    """
    Attributes:
        users_dir: Directory (relative to the workspace root) holding user records.
        accounts_dir: Directory holding encrypted service-account records.
        static_dir: Directory holding the static site assets.
        remote_name: Name of the git remote every working copy tracks.
        branch: Single branch published to the remote.
        author_name: Fixed git author and committer name.
        author_email: Fixed git author and committer email.
        commit_message: Message used for every deploy commit.
        gist_host: Host serving gist repositories over smart HTTP.
        file_mode: Permission bits for record files.
        dir_mode: Permission bits for record directories.
    """

    users_dir: str = "users"
    accounts_dir: str = "accounts"
    static_dir: str = "static"
    remote_name: str = "origin"
    branch: str = "master"
    author_name: str = "gdir"
    author_email: str = "gdir@gmail.com"
    commit_message: str = "[gdir] deploy"
    gist_host: str = "gist.github.com"
    file_mode: int = 0o600
    dir_mode: int = 0o700

    def __post_init__(self) -> None:
        for name in ("users_dir", "accounts_dir", "static_dir"):
            value = getattr(self, name)
            if not value or Path(value).is_absolute():
                msg = f"{name} must be a non-empty relative path"
                raise ValueError(msg)
        if len({self.users_dir, self.accounts_dir, self.static_dir}) != 3:
            msg = "users_dir, accounts_dir and static_dir must differ"
            raise ValueError(msg)
        if not self.remote_name:
            msg = "remote_name must not be empty"
            raise ValueError(msg)
        if not self.branch:
            msg = "branch must not be empty"
            raise ValueError(msg)
        if not self.author_name or not self.author_email:
            msg = "author identity must not be empty"
            raise ValueError(msg)
        if not self.commit_message:
            msg = "commit_message must not be empty"
            raise ValueError(msg)


@dataclass(frozen=True, kw_only=True)
class GdirContext:
    """
    Explicit shared state for one operator run.

    Attributes:
        secret: Master secret used for record encryption and path derivation.
        root: Workspace root the record directories live under.
        config: Static configuration.
    """

    secret: SecretKey
    root: Path
    config: GdirConfig = field(default_factory=GdirConfig)

    @property
    def users_path(self) -> Path:
        return self.root / self.config.users_dir

    @property
    def accounts_path(self) -> Path:
        return self.root / self.config.accounts_dir

    @property
    def static_path(self) -> Path:
        return self.root / self.config.static_dir
