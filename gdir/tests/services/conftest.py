from pathlib import Path

import pytest
from git import Actor, Repo

from gdir.services.deploy import DeploySynchronizer
from gdir.services.repository import RepositoryReconciler

SEED_AUTHOR = Actor("seed", "seed@example.com")


def commit_file(repo: Repo, name: str, content: str, message: str = "seed") -> str:
    """Write, stage and commit one file in a non-bare repository."""
    path = Path(repo.working_tree_dir) / name
    path.write_text(content)
    repo.index.add([name])
    return repo.index.commit(message, author=SEED_AUTHOR, committer=SEED_AUTHOR).hexsha


def remote_paths(remote: Path, branch: str = "master") -> set[str]:
    """File paths in the tip tree of ``branch`` of a bare repository."""
    with Repo(remote) as repo:
        return {item.path for item in repo.commit(branch).tree.traverse() if item.type == "blob"}


@pytest.fixture
def remote(tmp_path: Path) -> Path:
    """Bare repository whose master holds a single ``seed.txt``."""
    bare_path = tmp_path / "remote.git"
    with Repo.init(bare_path, bare=True) as bare:
        bare.git.symbolic_ref("HEAD", "refs/heads/master")

    with Repo.init(tmp_path / "seed") as seed:
        seed.git.symbolic_ref("HEAD", "refs/heads/master")
        commit_file(seed, "seed.txt", "seed")
        seed.create_remote("origin", str(bare_path))
        seed.git.push("origin", "HEAD:refs/heads/master")
    return bare_path


@pytest.fixture
def reconciler() -> RepositoryReconciler:
    return RepositoryReconciler()


@pytest.fixture
def deployer() -> DeploySynchronizer:
    return DeploySynchronizer()


@pytest.fixture
def checkout(tmp_path: Path, remote: Path, reconciler: RepositoryReconciler) -> Path:
    """Reconciled working copy of ``remote``."""
    directory = tmp_path / "work"
    reconciler.reconcile(directory, str(remote))
    return directory
