"""
gdir workspace facade.

This is the entry point the setup wizard drives. It wires the run context,
the record stores and the three distribution targets (accounts, users,
static), each of which is a checkout of its own gist.
"""

from dataclasses import dataclass, field
from pathlib import Path

import structlog

from gdir.config import GdirConfig, GdirContext
from gdir.core.git_ops import gist_remote_url
from gdir.crypto.secret_key import SecretKey
from gdir.models.repository import DeployResult, ReconcileReport
from gdir.services.account_import import AccountImporter
from gdir.services.deploy import DeploySynchronizer
from gdir.services.repository import RepositoryReconciler
from gdir.services.static_assets import StaticAssetSync
from gdir.services.user_store import UserStore

logger = structlog.get_logger(__name__)


@dataclass(frozen=True, kw_only=True)
class GistCredentials:
    """
    Attributes:
        username: Gist owner login.
        token: Personal access token with gist scope.
        accounts_id: Gist holding the encrypted accounts.
        users_id: Gist holding the encrypted users.
        static_id: Gist holding the static assets.
    """

    username: str
    token: str = field(repr=False)
    accounts_id: str
    users_id: str
    static_id: str


@dataclass(frozen=True, kw_only=True)
class DistributionTarget:
    """A local directory published to one gist."""

    name: str
    directory: Path
    remote_url: str = field(repr=False)


class Workspace:
    """
    Operator workspace.

    Example:
        ```python
        workspace = Workspace(Path("."), SecretKey.from_string(secret), gist)
        workspace.reconcile_all()
        workspace.accounts.import_directory(Path("~/accounts").expanduser())
        workspace.users.save(User(name="admin", password="..."))
        workspace.deploy_all()
        ```
    """

    def __init__(
        self,
        root: Path,
        secret: SecretKey,
        gist: GistCredentials,
        config: GdirConfig | None = None,
    ) -> None:
        """
        Args:
            root: Directory holding the accounts, users and static checkouts.
            secret: Master secret.
            gist: Gist coordinates and credentials.
            config: Configuration. Uses defaults if not provided.
        """
        self._config = config or GdirConfig()
        self._context = GdirContext(secret=secret, root=root, config=self._config)
        self._gist = gist

        self.users = UserStore(self._context)
        self.accounts = AccountImporter(self._context)
        self.static = StaticAssetSync(self._context)

        self._reconciler = RepositoryReconciler(self._config)
        self._deployer = DeploySynchronizer(self._config)

    @property
    def context(self) -> GdirContext:
        return self._context

    def targets(self) -> list[DistributionTarget]:
        """Distribution targets in publishing order."""
        gist = self._gist
        pairs = [
            ("accounts", self._context.accounts_path, gist.accounts_id),
            ("users", self._context.users_path, gist.users_id),
            ("static", self._context.static_path, gist.static_id),
        ]
        return [
            DistributionTarget(
                name=name,
                directory=directory,
                remote_url=gist_remote_url(
                    gist.username, gist.token, gist_id, host=self._config.gist_host
                ),
            )
            for name, directory, gist_id in pairs
        ]

    def reconcile_all(self) -> dict[str, ReconcileReport]:
        """Reconcile every target checkout. Stops at the first failure."""
        reports = {}
        for target in self.targets():
            reports[target.name] = self._reconciler.reconcile(target.directory, target.remote_url)
        return reports

    def deploy_all(self) -> dict[str, DeployResult]:
        """Deploy every target. Stops at the first failure."""
        results = {}
        for target in self.targets():
            results[target.name] = self._deployer.deploy(target.directory)
            if results[target.name].committed:
                logger.info("Target deployed", target=target.name)
        return results

    def push_all(self) -> None:
        """
        Force-push every target's current commit without committing.

        This is the retry path after ``deploy_all`` failed in a push: the
        commit is already on disk, so a second deploy sees a clean tree.
        Stops at the first failure.
        """
        for target in self.targets():
            self._deployer.push(target.directory)
            logger.info("Target pushed", target=target.name)
