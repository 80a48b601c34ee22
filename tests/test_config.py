"""Unit tests for configuration loading."""

import logging
from pathlib import Path

import pytest

from cilium_releases.core.config import Config, get_config, set_config
from cilium_releases.core.errors import ConfigError


def write_config(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(text)
    return path


def describe_Config():
    def describe_from_file():
        def it_uses_defaults_when_the_file_is_missing(tmp_path: Path):
            config = Config.from_file(tmp_path / "config.yaml")

            assert config.api_url == "https://api.github.com"
            assert config.repo_slug == "cilium/cilium"
            assert config.walker_workers == 4
            assert config.config_path == tmp_path / "config.yaml"

        def it_overrides_defaults_from_yaml(tmp_path: Path):
            path = write_config(
                tmp_path,
                "api_url: https://ghe.example.com/api/v3\n"
                "owner: isovalent\n"
                "walker_workers: 8\n",
            )

            config = Config.from_file(path)

            assert config.api_url == "https://ghe.example.com/api/v3"
            assert config.repo_slug == "isovalent/cilium"
            assert config.walker_workers == 8

        def it_treats_an_empty_file_as_defaults(tmp_path: Path):
            config = Config.from_file(write_config(tmp_path, ""))

            assert config.owner == "cilium"

        def it_ignores_unknown_keys_with_a_warning(tmp_path: Path, caplog):
            path = write_config(tmp_path, "owner: isovalent\ntoken: secret\n")

            with caplog.at_level(logging.WARNING, logger="cilium_releases.core.config"):
                config = Config.from_file(path)

            assert config.owner == "isovalent"
            assert "token" in caplog.text

        def it_rejects_a_non_mapping(tmp_path: Path):
            with pytest.raises(ConfigError, match="mapping"):
                Config.from_file(write_config(tmp_path, "- owner\n- repo\n"))

        @pytest.mark.parametrize("text", ["walker_workers: four\n", "walker_workers: true\n", "owner: 5\n"])
        def it_rejects_values_of_the_wrong_type(tmp_path: Path, text):
            with pytest.raises(ConfigError, match="must be of type"):
                Config.from_file(write_config(tmp_path, text))

        @pytest.mark.parametrize("workers", [0, -2])
        def it_rejects_a_non_positive_worker_count(tmp_path: Path, workers):
            with pytest.raises(ConfigError, match="at least 1"):
                Config.from_file(write_config(tmp_path, f"walker_workers: {workers}\n"))

        def it_rejects_invalid_yaml(tmp_path: Path):
            with pytest.raises(ConfigError, match="Cannot read"):
                Config.from_file(write_config(tmp_path, "owner: [unclosed\n"))

    def describe_default():
        def it_reads_config_from_the_home_directory(tmp_path: Path, monkeypatch):
            write_config(tmp_path, "repo: tetragon\n")
            monkeypatch.setenv("CILIUM_RELEASES_HOME", str(tmp_path))
            monkeypatch.delenv("CILIUM_RELEASES_REPO", raising=False)

            assert Config.default().repo == "tetragon"

        def it_lets_the_environment_win(tmp_path: Path, monkeypatch):
            write_config(tmp_path, "owner: isovalent\nrepo: tetragon\n")
            monkeypatch.setenv("CILIUM_RELEASES_HOME", str(tmp_path))
            monkeypatch.setenv("CILIUM_RELEASES_OWNER", "cilium")
            monkeypatch.setenv("CILIUM_RELEASES_API_URL", "http://localhost:8080")

            config = Config.default()

            assert config.owner == "cilium"
            assert config.repo == "tetragon"
            assert config.api_url == "http://localhost:8080"


def describe_get_config():
    def it_returns_the_configured_instance(config):
        assert get_config() is config

    def it_builds_the_default_lazily(tmp_path: Path, monkeypatch):
        monkeypatch.setenv("CILIUM_RELEASES_HOME", str(tmp_path))
        for var in ("CILIUM_RELEASES_API_URL", "CILIUM_RELEASES_OWNER", "CILIUM_RELEASES_REPO"):
            monkeypatch.delenv(var, raising=False)
        set_config(None)

        first = get_config()

        assert first == Config(config_path=tmp_path / "config.yaml")
        assert get_config() is first
