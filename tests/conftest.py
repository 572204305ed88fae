"""Shared test fixtures and utilities."""

from pathlib import Path

import pytest

from filewatcher.config import StoreConfig
from filewatcher.store import SnapshotStore


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Run the test from an empty working directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def store_config(tmp_path):
    """StoreConfig rooted in tmp_path instead of the working directory."""
    return StoreConfig(storage_dir=tmp_path / "watcher")


@pytest.fixture
def initialized_store(store_config):
    """Initialized store with an empty snapshot and changed list."""
    store = SnapshotStore(store_config)
    store.init()
    return store


@pytest.fixture
def scan_dir(tmp_path):
    """Directory to scan, separate from the store."""
    target = tmp_path / "src"
    target.mkdir()
    return target


@pytest.fixture
def write_file(scan_dir):
    """Factory fixture to write files relative to scan_dir."""
    def _write(path: str, content: str = "test content") -> Path:
        file_path = scan_dir / path
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(content)
        return file_path
    return _write
