"""
Service-account import.

Each non-empty ``*.json`` file of the source directory becomes an
``account``-kind record named by its position (``0``, ``1``, ...), which is
how the worker enumerates accounts.
"""

from pathlib import Path

import structlog

from gdir.config import GdirContext
from gdir.exceptions import StorageError
from gdir.services.record_store import RecordStore

logger = structlog.get_logger(__name__)

ACCOUNT_KIND = "account"


class AccountImporter:
    """Encrypts service-account JSON files into the accounts directory."""

    def __init__(self, context: GdirContext) -> None:
        """
        Args:
            context: Run context.
        """
        self._records = RecordStore(context, context.accounts_path, ACCOUNT_KIND)

    @property
    def directory(self) -> Path:
        return self._records.directory

    def count(self) -> int:
        """Number of account records currently stored."""
        return len(self._numbered())

    def read(self, index: int) -> bytes:
        """Decrypt the account record at ``index``."""
        return self._records.read_path(self.directory / str(index))

    def import_directory(self, source: Path) -> int:
        """
        Encrypt every account file of ``source``.

        Records left over from a larger previous import are removed so the
        stored set is exactly ``0 .. count - 1``.

        Args:
            source: Directory of service-account JSON files.

        Returns:
            Number of accounts imported.

        Raises:
            StorageError: If the source directory or a file cannot be read.
        """
        files = self._account_files(source)
        self._records.ensure_directory()

        for index, path in enumerate(files):
            logger.debug("Encrypting account", index=index, file=path.name)
            try:
                plaintext = path.read_bytes()
            except OSError as e:
                msg = f"Cannot read account file: {e}"
                raise StorageError(msg, path=str(path)) from e
            self._records.write_path(self.directory / str(index), plaintext)

        for index, path in self._numbered():
            if index >= len(files):
                self._records.remove_path(path)
                logger.debug("Stale account removed", index=index)

        logger.info("Accounts imported", count=len(files), source=str(source))
        return len(files)

    @staticmethod
    def _account_files(source: Path) -> list[Path]:
        try:
            entries = sorted(source.iterdir())
            return [
                p
                for p in entries
                if p.suffix == ".json" and p.is_file() and p.stat().st_size > 0
            ]
        except OSError as e:
            msg = f"Cannot scan accounts directory: {e}"
            raise StorageError(msg, path=str(source)) from e

    def _numbered(self) -> list[tuple[int, Path]]:
        return [(int(p.name), p) for p in self._records.paths() if p.name.isdigit()]
