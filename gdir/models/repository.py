"""
Repository domain models.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, kw_only=True)
class AuthorIdentity:
    """Git author and committer used for every deploy."""

    name: str
    email: str


@dataclass(frozen=True, kw_only=True)
class RepositoryState:
    """
    Desired state of a distribution working copy.

    Attributes:
        working_directory: Local checkout path.
        remote_url: Remote URL, may embed ``user:token@``.
        tracked_branch: Branch tracked on the remote.
        author: Identity written to the repository config.
    """

    working_directory: Path
    remote_url: str
    tracked_branch: str
    author: AuthorIdentity


@dataclass(frozen=True, kw_only=True)
class ReconcileReport:
    """What a reconciliation had to change. All false means it was a no-op."""

    cloned: bool = False
    remote_updated: bool = False
    identity_updated: bool = False
    branch_created: bool = False

    @property
    def changed(self) -> bool:
        return self.cloned or self.remote_updated or self.identity_updated or self.branch_created


@dataclass(frozen=True, kw_only=True)
class DeployResult:
    """
    Outcome of a deploy.

    Attributes:
        committed: Whether a commit was created.
        commit_sha: Hex SHA of the new commit, if any.
        pushed: Whether the push completed.
        deleted: Paths whose removal was staged.
    """

    committed: bool = False
    commit_sha: str | None = None
    pushed: bool = False
    deleted: tuple[str, ...] = ()
