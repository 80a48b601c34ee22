"""GitHub API client for fetching releases."""

import json
import logging
import re

import httpx

from cilium_releases.core.config import Config, get_config
from cilium_releases.core.errors import GetLatestReleasesError
from cilium_releases.models.release import Release

logger = logging.getLogger(__name__)

GITHUB_HEADERS = {
    "Accept": "application/vnd.github+json",
    "X-GitHub-Api-Version": "2022-11-28",
}

# Errors httpx and the underlying stream may raise while reading or closing
_STREAM_ERRORS = (httpx.HTTPError, httpx.StreamError, OSError)


def parse_repo_spec(spec: str) -> tuple[str, str]:
    """Parse a repo spec into (owner, repo).

    Accepts:
    - owner/repo
    - https://github.com/owner/repo
    - github.com/owner/repo
    """
    # Handle full URLs
    url_pattern = r"(?:https?://)?github\.com/([^/]+)/([^/]+?)(?:\.git)?/?$"
    match = re.match(url_pattern, spec)
    if match:
        return match.group(1), match.group(2)

    # Handle owner/repo format
    if "/" in spec:
        parts = spec.split("/")
        if len(parts) == 2 and all(parts):
            return parts[0], parts[1]

    raise ValueError(f"Invalid repo spec: {spec}. Use 'owner/repo' or GitHub URL.")


def decode_releases(body: bytes) -> list[Release]:
    """Decode a releases listing. Raises ValueError if it is not one."""
    data = json.loads(body)
    if not isinstance(data, list):
        raise ValueError(f"expected a JSON array of releases, got {type(data).__name__}")

    releases = []
    for item in data:
        if not isinstance(item, dict):
            raise ValueError(f"expected a release object, got {type(item).__name__}")
        try:
            releases.append(Release.from_api_response(item))
        except (TypeError, AttributeError) as e:
            raise ValueError(f"malformed release object: {e}") from e
    return releases


class GitHubClient:
    """Client for interacting with GitHub API."""

    def __init__(
        self,
        config: Config | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        self.config = config or get_config()
        self.client = httpx.Client(
            base_url=self.config.api_url,
            headers=GITHUB_HEADERS,
            transport=transport,
        )

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.client.close()

    def get_latest_releases(self, count: int) -> list[Release]:
        """Get the newest `count` releases of the configured repository.

        Sends one request with no retry. The response is read, decoded and
        then closed; a failure at any of those steps raises
        GetLatestReleasesError, so a decoded listing is dropped if the
        close fails.
        """
        if isinstance(count, bool) or not isinstance(count, int) or count < 1:
            raise ValueError(f"count must be a positive integer, got {count!r}")

        request = self.client.build_request(
            "GET",
            f"/repos/{self.config.owner}/{self.config.repo}/releases",
            params={"per_page": count},
            # The body is read off the raw stream, so it must not be compressed
            headers={"Accept-Encoding": "identity"},
        )
        logger.debug("GET %s", request.url)

        try:
            response = self.client.send(request, stream=True)
        except httpx.HTTPError as e:
            raise GetLatestReleasesError(e) from e

        try:
            releases = self._read_releases(response)
        except GetLatestReleasesError:
            try:
                response.close()
            except _STREAM_ERRORS:
                logger.debug("Close failed after an earlier error", exc_info=True)
            raise

        try:
            response.close()
        except _STREAM_ERRORS as e:
            raise GetLatestReleasesError(e) from e

        logger.debug("Fetched %d releases of %s", len(releases), self.config.repo_slug)
        return releases

    def _read_releases(self, response: httpx.Response) -> list[Release]:
        if response.status_code != 200:
            raise GetLatestReleasesError(
                f"unexpected status code: {response.status_code}",
                status_code=response.status_code,
            )

        try:
            # Response.read() would close the stream before decoding
            body = b"".join(response.stream)
        except _STREAM_ERRORS as e:
            raise GetLatestReleasesError(e) from e

        try:
            return decode_releases(body)
        except ValueError as e:
            raise GetLatestReleasesError(e) from e


def get_latest_releases(count: int, client: GitHubClient | None = None) -> list[Release]:
    """Fetch the latest releases from the cilium repository."""
    if client is not None:
        return client.get_latest_releases(count)
    with GitHubClient() as client:
        return client.get_latest_releases(count)
