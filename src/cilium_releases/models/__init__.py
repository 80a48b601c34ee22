"""Data models for cilium-releases."""

from cilium_releases.models.release import Release, Asset, Version

__all__ = ["Release", "Asset", "Version"]
