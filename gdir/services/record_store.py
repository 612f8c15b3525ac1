"""
File-backed store of encrypted records.

Each store is one directory holding records of a single kind. Record files
are named by ``derive_record_name(secret, name)`` unless the caller writes an
explicit file name.
"""

import os
from pathlib import Path

import structlog

from gdir.config import GdirContext
from gdir.crypto.record_cipher import decrypt_record, derive_record_name, encrypt_record
from gdir.exceptions import RecordNotFoundError, StorageError

logger = structlog.get_logger(__name__)


class RecordStore:
    """
    Directory of records of one kind.

    Missing files raise ``RecordNotFoundError``; every other OS failure is
    raised as ``StorageError``.
    """

    def __init__(self, context: GdirContext, directory: Path, kind: str) -> None:
        """
        Args:
            context: Run context carrying the secret and file modes.
            directory: Directory the records live in.
            kind: Record kind bound into every record.
        """
        self._context = context
        self._directory = directory
        self._kind = kind

    @property
    def directory(self) -> Path:
        return self._directory

    @property
    def kind(self) -> str:
        return self._kind

    def path_for(self, name: str) -> Path:
        """Derived location of the record for a logical name."""
        return self._directory / derive_record_name(self._context.secret, name)

    def ensure_directory(self) -> None:
        try:
            self._directory.mkdir(mode=self._context.config.dir_mode, parents=True, exist_ok=True)
        except OSError as e:
            msg = f"Cannot create record directory: {e}"
            raise StorageError(msg, path=str(self._directory)) from e

    def write(self, name: str, plaintext: bytes) -> Path:
        """Encrypt and write the record for a logical name."""
        return self.write_path(self.path_for(name), plaintext)

    def write_path(self, path: Path, plaintext: bytes) -> Path:
        """Encrypt and write a record to an explicit path inside the store."""
        self.ensure_directory()
        record = encrypt_record(self._context.secret, self._kind, plaintext)
        try:
            fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, self._context.config.file_mode)
            with os.fdopen(fd, "wb") as f:
                f.write(record)
            # creation mode is not applied to an existing file
            path.chmod(self._context.config.file_mode)
        except OSError as e:
            msg = f"Cannot write record: {e}"
            raise StorageError(msg, path=str(path)) from e
        logger.debug("Record written", kind=self._kind, path=str(path))
        return path

    def read(self, name: str) -> bytes:
        """Read and decrypt the record for a logical name."""
        return self.read_path(self.path_for(name))

    def read_path(self, path: Path) -> bytes:
        """
        Read and decrypt a record file.

        Raises:
            RecordNotFoundError: If the file does not exist.
            StorageError: If the file cannot be read.
            AuthenticationError: If the record does not verify.
        """
        try:
            record = path.read_bytes()
        except FileNotFoundError as e:
            msg = "Record not found"
            raise RecordNotFoundError(msg, path=str(path)) from e
        except OSError as e:
            msg = f"Cannot read record: {e}"
            raise StorageError(msg, path=str(path)) from e
        return decrypt_record(self._context.secret, self._kind, record)

    def exists(self, name: str) -> bool:
        return self.path_for(name).is_file()

    def remove(self, name: str) -> Path:
        """Delete the record for a logical name."""
        return self.remove_path(self.path_for(name))

    def remove_path(self, path: Path) -> Path:
        """
        Delete a record file.

        Raises:
            RecordNotFoundError: If the file does not exist.
            StorageError: If the file cannot be removed.
        """
        try:
            path.unlink()
        except FileNotFoundError as e:
            msg = "Record not found"
            raise RecordNotFoundError(msg, path=str(path)) from e
        except OSError as e:
            msg = f"Cannot remove record: {e}"
            raise StorageError(msg, path=str(path)) from e
        logger.debug("Record removed", kind=self._kind, path=str(path))
        return path

    def paths(self) -> list[Path]:
        """Record files in the store, sorted by name. Hidden entries are skipped."""
        if not self._directory.exists():
            return []
        try:
            entries = sorted(self._directory.iterdir())
        except OSError as e:
            msg = f"Cannot list record directory: {e}"
            raise StorageError(msg, path=str(self._directory)) from e
        return [p for p in entries if p.is_file() and not p.name.startswith(".")]
