"""
User records.

Users are ``user``-kind records in the users directory, addressed by the
path derived from their name. The name stored inside the record is not used
for lookup.
"""

from pathlib import Path

import structlog

from gdir.config import GdirContext
from gdir.exceptions import RecordNotFoundError, UserNotFoundError
from gdir.models.user import User
from gdir.services.record_store import RecordStore

logger = structlog.get_logger(__name__)

USER_KIND = "user"


class UserStore:
    """Service for saving, loading and removing users."""

    def __init__(self, context: GdirContext) -> None:
        """
        Args:
            context: Run context.
        """
        self._records = RecordStore(context, context.users_path, USER_KIND)

    @property
    def directory(self) -> Path:
        return self._records.directory

    def path_for(self, name: str) -> Path:
        return self._records.path_for(name)

    def save(self, user: User) -> Path:
        """Create or overwrite the record for ``user.name``."""
        path = self._records.write(user.name, user.to_json())
        logger.info("User saved", path=str(path))
        return path

    def load(self, name: str) -> User:
        """
        Load a user by name.

        Raises:
            UserNotFoundError: If no record exists for the name.
            AuthenticationError: If the record does not verify.
        """
        try:
            return User.from_json(self._records.read(name))
        except RecordNotFoundError as e:
            msg = f"User does not exist: {name}"
            raise UserNotFoundError(msg, name=name) from e

    def load_path(self, path: Path) -> User:
        """Load a user from a record file."""
        return User.from_json(self._records.read_path(path))

    def load_for_edit(self, name: str) -> tuple[User | None, User]:
        """
        Prepare an edit of ``name``.

        Returns:
            The existing user (or None when creating) and a draft carrying
            only the existing access lists. The password is left blank so
            the operator confirms or re-enters it.
        """
        try:
            existing = self.load(name)
        except UserNotFoundError:
            logger.info("Creating new user")
            return None, User(name=name)
        logger.info("Editing existing user")
        draft = User(name=name, allow_list=existing.allow_list, block_list=existing.block_list)
        return existing, draft

    def list_users(self) -> list[tuple[Path, User]]:
        """All stored users with their record paths, in file name order."""
        return [(path, self.load_path(path)) for path in self._records.paths()]

    def is_empty(self) -> bool:
        return not self._records.paths()

    def remove(self, name: str) -> Path:
        """
        Delete the user record for ``name``.

        Raises:
            UserNotFoundError: If no record exists for the name.
        """
        try:
            path = self._records.remove(name)
        except RecordNotFoundError as e:
            msg = f"User does not exist: {name}"
            raise UserNotFoundError(msg, name=name) from e
        logger.info("User removed", path=str(path))
        return path

    def rename(self, old_name: str, user: User) -> Path:
        """
        Save ``user`` under its own name and drop the record of ``old_name``.

        The new record is written first, so a failure leaves the old one in
        place.
        """
        path = self.save(user)
        if self._records.path_for(old_name) != path:
            self.remove(old_name)
        return path
