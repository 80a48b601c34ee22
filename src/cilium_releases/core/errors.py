"""Exceptions raised by cilium-releases."""


class CiliumReleasesError(Exception):
    """Base class for all cilium-releases errors."""

    pass


class ConfigError(CiliumReleasesError):
    """Configuration file could not be used."""

    pass


class GitHubError(CiliumReleasesError):
    """Error from GitHub API."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class GetLatestReleasesError(GitHubError):
    """Fetching the release list failed."""

    def __init__(self, cause, status_code: int | None = None):
        super().__init__(f"failed to get latest releases: {cause}", status_code)


class GetLatestReleaseNamesError(GitHubError):
    """Building the list of release names failed."""

    def __init__(self, cause, status_code: int | None = None):
        if status_code is None:
            status_code = getattr(cause, "status_code", None)
        super().__init__(f"failed to get latest release names: {cause}", status_code)


class WalkError(GitHubError):
    """Walking a repository tree failed."""

    pass


class GetFileNamesError(GitHubError):
    """Listing file names failed. Names collected before the failure are kept."""

    def __init__(self, cause, names: list[str] | None = None):
        super().__init__(
            f"failed to get file names: {cause}",
            getattr(cause, "status_code", None),
        )
        self.names = list(names or [])
