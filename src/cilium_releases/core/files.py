"""Listing file names in a repository directory."""

import logging
import threading

from cilium_releases.core.errors import GetFileNamesError
from cilium_releases.core.walker import DEFAULT_BRANCH, File, GitWalker, TreeWalker

logger = logging.getLogger(__name__)


class FileNameCollector:
    """Thread safe accumulator for file names reported during a walk."""

    def __init__(self):
        self._names: list[str] = []
        self._lock = threading.Lock()

    def add(self, name: str) -> None:
        with self._lock:
            self._names.append(name)

    def intercept(self, file: File) -> None:
        """File interceptor that records the file's name."""
        self.add(file.name)

    def names(self) -> list[str]:
        """Snapshot of the names collected so far, in the order added."""
        with self._lock:
            return list(self._names)

    def __len__(self) -> int:
        with self._lock:
            return len(self._names)


def get_file_names(
    owner: str,
    repo: str,
    path: str,
    walker: TreeWalker | None = None,
) -> list[str]:
    """Return the names of the files under `path` on the master branch.

    Order follows the walker and is not guaranteed. If the walk fails,
    GetFileNamesError is raised with the names found before the failure
    in its `names` attribute.
    """
    if walker is None:
        walker = GitWalker()

    collector = FileNameCollector()
    try:
        (
            walker.owner(owner)
            .repo(repo)
            .branch(DEFAULT_BRANCH)
            .root(path)
            .register_file_interceptor(collector.intercept)
            .walk()
        )
    except Exception as e:
        raise GetFileNamesError(e, names=collector.names()) from e

    logger.debug("Found %d files under %s/%s:%s", len(collector), owner, repo, path)
    return collector.names()
