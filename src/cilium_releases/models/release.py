"""GitHub release data models."""

import re
from dataclasses import dataclass, field


# Trailing dotted numeric suffix, e.g. "1.14.2" in "v1.14.2"
_NUMERIC_SUFFIX = re.compile(r"\d+(?:\.\d+)*\Z")


class Version(str):
    """Name of a release, expected to end in a dotted numeric sequence.

    Compares as a plain string. Use numeric_parts() for component-wise
    ordering.
    """

    def numeric_parts(self) -> tuple[int, ...]:
        """Integer components of the trailing numeric suffix, or ()."""
        match = _NUMERIC_SUFFIX.search(self)
        if not match:
            return ()
        return tuple(int(part) for part in match.group(0).split("."))


@dataclass(frozen=True)
class Asset:
    """Represents a GitHub release asset."""

    name: str = ""
    state: str = ""
    download_url: str = ""

    @classmethod
    def from_api_response(cls, data: dict) -> "Asset":
        """Create Asset from GitHub API response."""
        return cls(
            name=data.get("name") or "",
            state=data.get("state") or "",
            download_url=data.get("browser_download_url") or "",
        )


@dataclass(frozen=True)
class Release:
    """Represents a GitHub release."""

    id: int = 0
    tag_name: str = ""
    name: Version = Version("")
    draft: bool = False
    assets: tuple[Asset, ...] = field(default_factory=tuple)

    @classmethod
    def from_api_response(cls, data: dict) -> "Release":
        """Create Release from GitHub API response."""
        assets = tuple(Asset.from_api_response(a) for a in data.get("assets") or [])
        return cls(
            id=data.get("id") or 0,
            tag_name=data.get("tag_name") or "",
            name=Version(data.get("name") or ""),
            draft=bool(data.get("draft", False)),
            assets=assets,
        )
