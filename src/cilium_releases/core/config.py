"""Configuration and path management for cilium-releases."""

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path

import yaml

from cilium_releases.core.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_OWNER = "cilium"
DEFAULT_REPO = "cilium"
DEFAULT_WALKER_WORKERS = 4

# Keys a config.yaml may set, and the type each must have
_FILE_KEYS = {
    "api_url": str,
    "owner": str,
    "repo": str,
    "walker_workers": int,
}

_ENV_KEYS = {
    "CILIUM_RELEASES_API_URL": "api_url",
    "CILIUM_RELEASES_OWNER": "owner",
    "CILIUM_RELEASES_REPO": "repo",
}


@dataclass(frozen=True)
class Config:
    """Configuration for cilium-releases."""

    api_url: str = DEFAULT_API_URL
    owner: str = DEFAULT_OWNER
    repo: str = DEFAULT_REPO
    walker_workers: int = DEFAULT_WALKER_WORKERS
    config_path: Path | None = None

    @classmethod
    def default(cls) -> "Config":
        """Create config from defaults, config.yaml and the environment."""
        base = Path(os.environ.get("CILIUM_RELEASES_HOME", Path.home() / ".cilium-releases"))
        config = cls.from_file(base / "config.yaml")

        overrides = {
            attr: os.environ[var] for var, attr in _ENV_KEYS.items() if os.environ.get(var)
        }
        if overrides:
            config = replace(config, **overrides)
        return config

    @classmethod
    def from_file(cls, path: Path) -> "Config":
        """Load config from a YAML file. A missing file yields the defaults."""
        if not path.exists():
            return cls(config_path=path)

        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Cannot read config file {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a mapping")

        values = {}
        for key, value in data.items():
            expected = _FILE_KEYS.get(key)
            if expected is None:
                logger.warning("Ignoring unknown config key %r in %s", key, path)
                continue
            # bool is an int subclass, but never a valid count
            if not isinstance(value, expected) or isinstance(value, bool):
                raise ConfigError(
                    f"Config key {key!r} in {path} must be of type {expected.__name__}"
                )
            if key == "walker_workers" and value < 1:
                raise ConfigError(f"Config key {key!r} in {path} must be at least 1")
            values[key] = value

        return cls(config_path=path, **values)

    @property
    def repo_slug(self) -> str:
        return f"{self.owner}/{self.repo}"


# Global config instance
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config.default()
    return _config


def set_config(config: Config | None) -> None:
    """Set a custom configuration (useful for testing). None resets it."""
    global _config
    _config = config
