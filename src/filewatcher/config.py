"""Watcher configuration helpers."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List

import yaml

from .constants import CHANGED_FILES_FILE, SETTINGS_FILE, SNAPSHOT_FILE, WATCHER_DIR
from .errors import ConfigError


@dataclass(frozen=True)
class StoreConfig:
    """Where the snapshot store keeps its artifacts.

    Relative paths resolve against the working directory at use time, which
    matches the historical fixed layout (watcher/prev.json,
    watcher/changed_files.txt).
    """

    storage_dir: Path = Path(WATCHER_DIR)
    snapshot_name: str = SNAPSHOT_FILE
    changed_files_name: str = CHANGED_FILES_FILE

    @property
    def snapshot_path(self) -> Path:
        return self.storage_dir / self.snapshot_name

    @property
    def changed_files_path(self) -> Path:
        return self.storage_dir / self.changed_files_name

    @property
    def settings_path(self) -> Path:
        return self.storage_dir / SETTINGS_FILE


@dataclass
class WatcherSettings:
    """Optional scan settings read from <storage_dir>/config.yaml."""

    ignore: List[str] = field(default_factory=list)
    recursive: bool = False


def load_settings(config: StoreConfig) -> WatcherSettings:
    """Load scan settings if the settings file exists, else defaults."""

    path = config.settings_path
    if not path.exists():
        return WatcherSettings()

    try:
        data = yaml.safe_load(path.read_text()) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(path, str(e)) from e

    if not isinstance(data, dict):
        raise ConfigError(path, "expected a mapping at top level")

    ignore = data.get("ignore", [])
    if not isinstance(ignore, list) or not all(isinstance(p, str) for p in ignore):
        raise ConfigError(path, "'ignore' must be a list of patterns")

    recursive = data.get("recursive", False)
    if not isinstance(recursive, bool):
        raise ConfigError(path, "'recursive' must be true or false")

    return WatcherSettings(ignore=ignore, recursive=recursive)
