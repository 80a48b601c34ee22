"""Walking the files of a GitHub repository directory."""

import logging
from concurrent.futures import FIRST_COMPLETED, ThreadPoolExecutor, wait
from dataclasses import dataclass
from typing import Callable, Protocol

import httpx

from cilium_releases.core.config import Config, get_config
from cilium_releases.core.errors import WalkError
from cilium_releases.core.github import GITHUB_HEADERS

logger = logging.getLogger(__name__)

DEFAULT_BRANCH = "master"

# A root ending with this suffix is walked recursively
RECURSIVE_SUFFIX = "/**"


@dataclass(frozen=True)
class File:
    """A file found while walking a repository."""

    name: str
    path: str
    sha: str = ""
    size: int = 0
    download_url: str = ""

    @classmethod
    def from_api_response(cls, data: dict) -> "File":
        return cls(
            name=data["name"],
            path=data["path"],
            sha=data.get("sha") or "",
            size=data.get("size") or 0,
            download_url=data.get("download_url") or "",
        )


@dataclass(frozen=True)
class Directory:
    """A directory found while walking a repository."""

    name: str
    path: str
    sha: str = ""

    @classmethod
    def from_api_response(cls, data: dict) -> "Directory":
        return cls(name=data["name"], path=data["path"], sha=data.get("sha") or "")


FileInterceptor = Callable[[File], None]
DirInterceptor = Callable[[Directory], None]


class TreeWalker(Protocol):
    """Something that can list the files under a path of a repository.

    Setters return the walker so calls can be chained. walk() invokes the
    file interceptor once per file, possibly from several threads at once,
    and raises if the traversal fails.
    """

    def owner(self, owner: str) -> "TreeWalker": ...

    def repo(self, repo: str) -> "TreeWalker": ...

    def branch(self, branch: str) -> "TreeWalker": ...

    def root(self, root: str) -> "TreeWalker": ...

    def register_file_interceptor(self, interceptor: FileInterceptor) -> "TreeWalker": ...

    def register_dir_interceptor(self, interceptor: DirInterceptor) -> "TreeWalker": ...

    def walk(self) -> None: ...


def split_root(root: str) -> tuple[str, bool]:
    """Split a walk root into (path, recursive)."""
    root = "/" + root.strip("/")
    if root.endswith(RECURSIVE_SUFFIX):
        return root[: -len(RECURSIVE_SUFFIX)].strip("/"), True
    return root.strip("/"), False


class GitWalker:
    """TreeWalker backed by the GitHub contents API.

    Subdirectories are listed concurrently on a pool of `max_workers`
    threads, so interceptors must be thread safe.
    """

    def __init__(
        self,
        config: Config | None = None,
        transport: httpx.BaseTransport | None = None,
        max_workers: int | None = None,
    ):
        self.config = config or get_config()
        self.transport = transport
        self.max_workers = max_workers if max_workers is not None else self.config.walker_workers
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {self.max_workers}")
        self._owner = ""
        self._repo = ""
        self._branch = DEFAULT_BRANCH
        self._root = ""
        self._file_interceptor: FileInterceptor | None = None
        self._dir_interceptor: DirInterceptor | None = None

    def owner(self, owner: str) -> "GitWalker":
        self._owner = owner
        return self

    def repo(self, repo: str) -> "GitWalker":
        self._repo = repo
        return self

    def branch(self, branch: str) -> "GitWalker":
        self._branch = branch
        return self

    def root(self, root: str) -> "GitWalker":
        self._root = root
        return self

    def register_file_interceptor(self, interceptor: FileInterceptor) -> "GitWalker":
        self._file_interceptor = interceptor
        return self

    def register_dir_interceptor(self, interceptor: DirInterceptor) -> "GitWalker":
        self._dir_interceptor = interceptor
        return self

    def walk(self) -> None:
        """Walk the configured root, calling the interceptors as entries are found.

        The first failure stops the walk: listings not yet started are
        cancelled and the error is raised once running ones finish.
        """
        if not self._owner or not self._repo:
            raise WalkError("owner and repo must be set before walking")

        root, recursive = split_root(self._root)
        logger.debug(
            "Walking %s/%s@%s:%s (recursive=%s)",
            self._owner, self._repo, self._branch, root or "/", recursive,
        )

        with httpx.Client(
            base_url=self.config.api_url,
            headers=GITHUB_HEADERS,
            transport=self.transport,
        ) as client, ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            pending = {pool.submit(self._visit, client, root)}
            while pending:
                done, pending = wait(pending, return_when=FIRST_COMPLETED)
                for future in done:
                    error = future.exception()
                    if error is not None:
                        for other in pending:
                            other.cancel()
                        raise error
                    if recursive:
                        pending |= {
                            pool.submit(self._visit, client, directory.path)
                            for directory in future.result()
                        }

    def _visit(self, client: httpx.Client, path: str) -> list[Directory]:
        """List one path, report its entries and return its subdirectories."""
        entries = self._list(client, path)

        directories = []
        for entry in entries:
            kind = entry.get("type")
            if kind == "file":
                if self._file_interceptor is not None:
                    self._file_interceptor(File.from_api_response(entry))
            elif kind == "dir":
                directory = Directory.from_api_response(entry)
                if self._dir_interceptor is not None:
                    self._dir_interceptor(directory)
                directories.append(directory)
        return directories

    def _list(self, client: httpx.Client, path: str) -> list[dict]:
        url = f"/repos/{self._owner}/{self._repo}/contents"
        if path:
            url = f"{url}/{path}"

        try:
            response = client.get(url, params={"ref": self._branch})
        except httpx.HTTPError as e:
            raise WalkError(f"failed to list {path or '/'}: {e}") from e

        if response.status_code == 404:
            raise WalkError(
                f"{path or '/'} not found in {self._owner}/{self._repo}@{self._branch}",
                status_code=404,
            )
        if response.status_code != 200:
            raise WalkError(
                f"failed to list {path or '/'}: unexpected status code: {response.status_code}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise WalkError(f"failed to decode listing of {path or '/'}: {e}") from e

        # A path naming a single file is answered with that file's object
        if isinstance(data, dict):
            data = [data]
        if not isinstance(data, list) or not all(
            isinstance(entry, dict) and "name" in entry and "path" in entry
            for entry in data
        ):
            raise WalkError(f"unexpected listing format for {path or '/'}")

        logger.debug("Listed %d entries under %s", len(data), path or "/")
        return data
