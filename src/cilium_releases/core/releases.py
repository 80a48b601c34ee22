"""Ranking of release names."""

import logging
import re

from cilium_releases.core.errors import GetLatestReleaseNamesError, GitHubError
from cilium_releases.core.github import GitHubClient, get_latest_releases
from cilium_releases.models.release import Version

logger = logging.getLogger(__name__)

# Releases requested from GitHub regardless of how many names are wanted
RELEASE_PAGE_SIZE = 30

# At least three dot separated numeric groups at the very end of the name
VERSION_PATTERN = r"\d+(\.\d+){2,}\Z"


def latest_release_names(
    limit: int,
    client: GitHubClient | None = None,
    semantic: bool = False,
) -> list[Version]:
    """Return the names of the latest releases, at most `limit` of them.

    Names not ending in a dotted version (release candidates, two-part
    versions) are dropped. The rest are sorted descending as plain strings,
    so "9.0.0" ranks above "10.0.0". Pass semantic=True to compare the
    numeric components instead.
    """
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 0:
        raise ValueError(f"limit must be a non-negative integer, got {limit!r}")

    try:
        releases = get_latest_releases(RELEASE_PAGE_SIZE, client=client)
    except GitHubError as e:
        raise GetLatestReleaseNamesError(e) from e

    try:
        pattern = re.compile(VERSION_PATTERN)
    except re.error as e:
        raise GetLatestReleaseNamesError(e) from e

    names = [release.name for release in releases if pattern.search(release.name)]
    logger.debug("%d of %d release names are versions", len(names), len(releases))

    if semantic:
        names.sort(key=lambda name: (name.numeric_parts(), str(name)), reverse=True)
    else:
        names.sort(reverse=True)

    return names[:limit]
