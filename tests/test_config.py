"""Tests for store configuration and the optional settings file."""

from pathlib import Path

import pytest

from filewatcher.config import StoreConfig, WatcherSettings, load_settings
from filewatcher.errors import ConfigError


class TestStoreConfig:

    def test_defaults_match_fixed_layout(self):
        config = StoreConfig()

        assert config.snapshot_path == Path("watcher/prev.json")
        assert config.changed_files_path == Path("watcher/changed_files.txt")
        assert config.settings_path == Path("watcher/config.yaml")

    def test_custom_names(self, tmp_path):
        config = StoreConfig(
            storage_dir=tmp_path / ".cache",
            snapshot_name="hashes.json",
            changed_files_name="dirty.txt",
        )

        assert config.snapshot_path == tmp_path / ".cache" / "hashes.json"
        assert config.changed_files_path == tmp_path / ".cache" / "dirty.txt"


class TestLoadSettings:

    def test_missing_file_gives_defaults(self, store_config):
        assert load_settings(store_config) == WatcherSettings()

    def test_empty_file_gives_defaults(self, initialized_store, store_config):
        store_config.settings_path.write_text("")
        assert load_settings(store_config) == WatcherSettings()

    def test_reads_values(self, initialized_store, store_config):
        store_config.settings_path.write_text(
            "recursive: true\n"
            "ignore:\n"
            "  - '*.log'\n"
            "  - build/\n"
        )

        settings = load_settings(store_config)

        assert settings.recursive is True
        assert settings.ignore == ["*.log", "build/"]

    @pytest.mark.parametrize("content", [
        "ignore: [unclosed",
        "- just\n- a list\n",
        "ignore: '*.log'\n",
        "recursive: sometimes\n",
    ])
    def test_invalid_settings(self, initialized_store, store_config, content):
        store_config.settings_path.write_text(content)

        with pytest.raises(ConfigError) as exc_info:
            load_settings(store_config)
        assert "config.yaml" in str(exc_info.value)
