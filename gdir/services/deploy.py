"""
Deploy synchronizer.

Publishes a reconciled working copy: stages every change against the last
commit (deletions included), commits as the fixed gdir identity and
force-pushes. The remote is a replace-in-place snapshot, so diverging remote
history is overwritten.
"""

from datetime import UTC, datetime
from pathlib import Path

import structlog
from git import Actor, PushInfo, Repo

from gdir.config import GdirConfig
from gdir.core.git_ops import git_operation
from gdir.exceptions import DeployError
from gdir.models.repository import DeployResult

logger = structlog.get_logger(__name__)

_PUSH_FAILED = (
    PushInfo.REJECTED | PushInfo.REMOTE_REJECTED | PushInfo.REMOTE_FAILURE | PushInfo.ERROR
)


def parse_porcelain_status(output: str) -> list[tuple[str, str]]:
    """
    Parse ``git status --porcelain -z`` output.

    Returns:
        ``(XY status code, path)`` pairs. For renames and copies the new
        path is returned and the original path skipped.
    """
    changes = []
    entries = iter(output.split("\0"))
    for entry in entries:
        if len(entry) < 4:
            continue
        code, path = entry[:2], entry[3:]
        if code[0] in "RC":
            next(entries, None)
        changes.append((code, path))
    return changes


class DeploySynchronizer:
    """Commits and force-pushes working-tree drift."""

    def __init__(self, config: GdirConfig | None = None) -> None:
        """
        Args:
            config: Remote, branch, identity and commit message. Defaults if not provided.
        """
        self._config = config or GdirConfig()

    def status(self, directory: Path) -> list[tuple[str, str]]:
        """Working-tree changes of ``directory`` against its last commit."""
        with git_operation(directory, "open repository"):
            repo = Repo(directory)
        try:
            return self._status(repo, directory)
        finally:
            repo.close()

    def deploy(self, directory: Path) -> DeployResult:
        """
        Publish ``directory`` if it has drifted from its last commit.

        A commit created before a failed push stays in place; ``push`` sends
        it again without creating a new commit.

        Returns:
            What was committed and pushed. Nothing happens on a clean tree.

        Raises:
            RepositoryError: If the repository cannot be opened or inspected.
            DeployError: If staging, committing or pushing fails.
        """
        when = datetime.now(UTC)
        with git_operation(directory, "open repository"):
            repo = Repo(directory)
        try:
            changes = self._status(repo, directory)
            if not changes:
                logger.debug("Working tree clean, nothing to deploy", path=str(directory))
                return DeployResult()

            deleted = tuple(path for code, path in changes if code[1] == "D")
            sha = self._commit(repo, directory, deleted, when)
            self._push(repo, directory)
        finally:
            repo.close()

        return DeployResult(committed=True, commit_sha=sha, pushed=True, deleted=deleted)

    def push(self, directory: Path) -> None:
        """
        Force-push the current HEAD without committing.

        Raises:
            DeployError: If the push fails.
        """
        with git_operation(directory, "open repository"):
            repo = Repo(directory)
        try:
            self._push(repo, directory)
        finally:
            repo.close()

    @staticmethod
    def _status(repo: Repo, directory: Path) -> list[tuple[str, str]]:
        with git_operation(directory, "read worktree status"):
            output = repo.git.status("--porcelain", "-z", "--untracked-files=all")
        return parse_porcelain_status(output)

    def _commit(self, repo: Repo, directory: Path, deleted: tuple[str, ...], when: datetime) -> str:
        # `git add` of the tree alone does not record files already gone from disk
        if deleted:
            with git_operation(directory, "stage removals", DeployError):
                repo.index.remove(list(deleted), working_tree=False)
            logger.debug("Removals staged", count=len(deleted), path=str(directory))

        with git_operation(directory, "stage changes", DeployError):
            repo.git.add("--", ".")

        actor = Actor(self._config.author_name, self._config.author_email)
        timestamp = f"{int(when.timestamp())} +0000"
        with git_operation(directory, "commit", DeployError):
            commit = repo.index.commit(
                self._config.commit_message,
                author=actor,
                committer=actor,
                author_date=timestamp,
                commit_date=timestamp,
            )
        logger.info("Deploy committed", sha=commit.hexsha, path=str(directory))
        return commit.hexsha

    def _push(self, repo: Repo, directory: Path) -> None:
        name = self._config.remote_name
        refspec = f"HEAD:refs/heads/{self._config.branch}"
        try:
            remote = repo.remote(name)
        except ValueError as e:
            msg = f"Remote {name} is not configured"
            raise DeployError(msg, path=str(directory), operation="push") from e

        logger.info("Pushing deploy", remote=name, path=str(directory))
        with git_operation(directory, "push", DeployError):
            results = remote.push(refspec=refspec, force=True)

        failed = [r for r in results if r.flags & _PUSH_FAILED]
        if not results or failed:
            summary = "; ".join(r.summary.strip() for r in failed) or "no ref updated"
            msg = f"Failed to push: {summary}"
            raise DeployError(msg, path=str(directory), operation="push")
        logger.info("Deploy pushed", remote=name, path=str(directory))
