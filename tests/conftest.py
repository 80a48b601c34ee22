"""Shared fixtures.

Only the network is faked: tests route HTTP through httpx.MockTransport.
"""

import logging

import pytest

from cilium_releases.core.config import Config, set_config

API_URL = "https://api.github.test"


@pytest.fixture(autouse=True)
def config():
    """Isolate every test from the user's config file and environment."""
    config = Config(api_url=API_URL)
    set_config(config)
    yield config
    set_config(None)


@pytest.fixture(autouse=True)
def restore_logging():
    # The CLI reconfigures the root logger
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def make_release():
    """Build a release object as the GitHub API returns it."""

    def make(name, id=1, **overrides) -> dict:
        data = {
            "id": id,
            "tag_name": f"v{name}" if name else "",
            "name": name,
            "draft": False,
            "assets": [],
        }
        data.update(overrides)
        return data

    return make
