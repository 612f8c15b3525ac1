"""
Working-copy reconciliation.

Brings a directory into a known-good state as a git checkout of a
distribution remote. Running it again with the same inputs changes nothing.
"""

from pathlib import Path

import structlog
from git import Repo
from git.exc import InvalidGitRepositoryError

from gdir.config import GdirConfig
from gdir.core.git_ops import git_operation, redact_url
from gdir.exceptions import ConflictError
from gdir.models.repository import AuthorIdentity, ReconcileReport, RepositoryState

logger = structlog.get_logger(__name__)


class RepositoryReconciler:
    """
    Ensures a directory is a checkout of a remote with the expected remote,
    author identity and tracking branch.
    """

    def __init__(self, config: GdirConfig | None = None) -> None:
        """
        Args:
            config: Remote name, branch and author identity. Defaults if not provided.
        """
        self._config = config or GdirConfig()

    def desired_state(self, directory: Path, remote_url: str) -> RepositoryState:
        return RepositoryState(
            working_directory=directory,
            remote_url=remote_url,
            tracked_branch=self._config.branch,
            author=AuthorIdentity(name=self._config.author_name, email=self._config.author_email),
        )

    def reconcile(self, directory: Path, remote_url: str) -> ReconcileReport:
        """
        Reconcile ``directory`` against ``remote_url``.

        Args:
            directory: Working directory.
            remote_url: Remote URL, credentials may be embedded.

        Returns:
            What had to change.

        Raises:
            ConflictError: If the directory is non-empty but not a repository.
            RepositoryError: If any git operation fails.
        """
        state = self.desired_state(directory, remote_url)
        repo, cloned = self._open_or_clone(state)
        try:
            report = ReconcileReport(
                cloned=cloned,
                remote_updated=self._ensure_remote(repo, state),
                identity_updated=self._ensure_identity(repo, state),
                branch_created=self._ensure_branch(repo, state),
            )
        finally:
            repo.close()

        if report.changed:
            logger.info("Repository reconciled", path=str(directory), **_fields(report))
        else:
            logger.debug("Repository already reconciled", path=str(directory))
        return report

    def _open_or_clone(self, state: RepositoryState) -> tuple[Repo, bool]:
        directory = state.working_directory

        if directory.exists() and not directory.is_dir():
            msg = "Working directory path is not a directory"
            raise ConflictError(msg, path=str(directory), operation="open")

        if directory.is_dir():
            with git_operation(directory, "open repository"):
                try:
                    return Repo(directory), False
                except InvalidGitRepositoryError:
                    if any(directory.iterdir()):
                        msg = "Directory exists but is not a git repository"
                        raise ConflictError(
                            msg, path=str(directory), operation="open"
                        ) from None

        logger.info(
            "Cloning repository", url=redact_url(state.remote_url), path=str(directory)
        )
        with git_operation(directory, "clone repository"):
            return Repo.clone_from(state.remote_url, directory), True

    def _ensure_remote(self, repo: Repo, state: RepositoryState) -> bool:
        directory = state.working_directory
        name = self._config.remote_name

        try:
            remote = repo.remote(name)
        except ValueError:
            logger.info("Creating remote", remote=name, path=str(directory))
            with git_operation(directory, f"create remote {name}"):
                repo.create_remote(name, state.remote_url)
            return True

        with git_operation(directory, f"read remote {name}"):
            urls = list(remote.urls)
        if urls and urls[0] == state.remote_url:
            return False

        logger.warning("Correcting remote URL", remote=name, path=str(directory))
        with git_operation(directory, f"set remote {name} URL"):
            remote.set_url(state.remote_url)
        return True

    def _ensure_identity(self, repo: Repo, state: RepositoryState) -> bool:
        directory = state.working_directory
        author = state.author

        with git_operation(directory, "read git config"):
            with repo.config_reader("repository") as reader:
                name = str(reader.get_value("user", "name", ""))
                email = str(reader.get_value("user", "email", ""))
        if name == author.name and email == author.email:
            return False

        logger.warning("Rewriting author identity", path=str(directory))
        with git_operation(directory, "write git config"):
            with repo.config_writer("repository") as writer:
                writer.set_value("user", "name", author.name)
                writer.set_value("user", "email", author.email)
        return True

    def _ensure_branch(self, repo: Repo, state: RepositoryState) -> bool:
        directory = state.working_directory
        branch = state.tracked_branch
        remote = self._config.remote_name
        section = f'branch "{branch}"'
        merge_ref = f"refs/heads/{branch}"
        changed = False

        with git_operation(directory, f"create branch {branch}"):
            if branch not in {head.name for head in repo.heads}:
                tracked = f"refs/remotes/{remote}/{branch}"
                remote_ref = next((ref for ref in repo.refs if ref.path == tracked), None)
                if remote_ref is not None:
                    repo.create_head(branch, remote_ref)
                    logger.info("Branch created", branch=branch, path=str(directory))
                    changed = True
                elif not repo.head.is_valid() and repo.git.symbolic_ref("HEAD") != merge_ref:
                    repo.git.symbolic_ref("HEAD", merge_ref)
                    logger.info("Unborn HEAD moved", branch=branch, path=str(directory))
                    changed = True

        with git_operation(directory, "read git config"):
            with repo.config_reader("repository") as reader:
                current_remote = str(reader.get_value(section, "remote", ""))
                current_merge = str(reader.get_value(section, "merge", ""))
        if current_remote == remote and current_merge == merge_ref:
            return changed

        with git_operation(directory, f"configure branch {branch}"):
            with repo.config_writer("repository") as writer:
                writer.set_value(section, "remote", remote)
                writer.set_value(section, "merge", merge_ref)
        logger.info("Branch tracking configured", branch=branch, remote=remote)
        return True


def _fields(report: ReconcileReport) -> dict[str, bool]:
    return {
        "cloned": report.cloned,
        "remote_updated": report.remote_updated,
        "identity_updated": report.identity_updated,
        "branch_created": report.branch_created,
    }
