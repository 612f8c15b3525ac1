"""
Static asset distribution directory.
"""

import shutil
from pathlib import Path

import structlog

from gdir.config import GdirContext
from gdir.exceptions import StorageError

logger = structlog.get_logger(__name__)

_PRESERVED = ".git"


class StaticAssetSync:
    """Replaces the static directory contents, keeping its git metadata."""

    def __init__(self, context: GdirContext) -> None:
        self._context = context

    @property
    def directory(self) -> Path:
        return self._context.static_path

    def sync(self, source: Path) -> list[str]:
        """
        Make the static directory mirror ``source``.

        Every entry except ``.git`` is deleted first, so files dropped from
        the source show up as deletions on the next deploy.

        Returns:
            Copied file paths relative to the static directory, sorted.

        Raises:
            StorageError: If ``source`` is not a directory (nothing is deleted)
                or on any filesystem failure.
        """
        target = self.directory
        if not source.is_dir():
            msg = "Static source is not a directory"
            raise StorageError(msg, path=str(source))
        try:
            target.mkdir(mode=self._context.config.dir_mode, parents=True, exist_ok=True)
            for entry in target.iterdir():
                if entry.name == _PRESERVED:
                    continue
                if entry.is_dir() and not entry.is_symlink():
                    shutil.rmtree(entry)
                else:
                    entry.unlink()
            shutil.copytree(
                source, target, dirs_exist_ok=True, ignore=shutil.ignore_patterns(_PRESERVED)
            )
        except OSError as e:
            msg = f"Cannot sync static assets: {e}"
            raise StorageError(msg, path=str(target)) from e

        copied = sorted(
            p.relative_to(target).as_posix()
            for p in target.rglob("*")
            if p.is_file() and _PRESERVED not in p.relative_to(target).parts
        )
        logger.info("Static assets synced", count=len(copied), source=str(source))
        return copied
