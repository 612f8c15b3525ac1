"""Git helpers shared by the reconciler and the deploy synchronizer."""

import re
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from git.exc import GitError

from gdir.exceptions import RepositoryError

_URL_CREDENTIALS = re.compile(r"(?<=://)[^/@\s]+@")


def redact_url(text: str) -> str:
    """Replace ``user:token@`` in any URL inside ``text``."""
    return _URL_CREDENTIALS.sub("***@", text)


def gist_remote_url(username: str, token: str, gist_id: str, host: str = "gist.github.com") -> str:
    """Smart-HTTP URL of a gist with credentials embedded."""
    return f"https://{username}:{token}@{host}/{gist_id}.git"


@contextmanager
def git_operation(
    path: Path, operation: str, error: type[RepositoryError] = RepositoryError
) -> Iterator[None]:
    """
    Turn git and OS failures into ``error`` naming the path and operation.

    Git error messages echo the command line, so they are redacted before
    being attached.
    """
    try:
        yield
    except (GitError, OSError) as e:
        msg = f"Failed to {operation}: {redact_url(str(e))}"
        raise error(msg, path=str(path), operation=operation) from e
