"""Custom exceptions for filewatcher.

This module defines typed exceptions for better error handling and clearer
error messages. Every fatal condition raised by the library derives from
WatcherError so the CLI can report it and exit non-zero in one place.
"""

from pathlib import Path


class WatcherError(RuntimeError):
    """Base class for all watcher errors."""
    pass


# Scan Errors
class ScanError(WatcherError):
    """Target directory could not be listed."""

    def __init__(self, directory: Path, reason: str):
        self.directory = directory
        self.reason = reason
        super().__init__(f"Error reading directory {directory}: {reason}")


# Store Errors
class StoreError(WatcherError):
    """Base class for snapshot store errors."""
    pass


class StoreNotInitializedError(StoreError):
    """Storage directory is missing."""

    def __init__(self, storage_dir: Path):
        self.storage_dir = storage_dir
        super().__init__(
            f"Storage directory '{storage_dir}' does not exist.\n"
            f"Please run `watcher init` to generate necessary files."
        )


class SnapshotReadError(StoreError):
    """Snapshot exists but could not be read."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        super().__init__(f"Error reading snapshot {path}: {reason}")


class SnapshotCorruptError(StoreError):
    """Snapshot exists but is not a valid path -> digest mapping."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(
            f"Snapshot {path} is corrupted: {reason}\n"
            f"Run `watcher clear` to reset it; the next run will repopulate it."
        )


class SnapshotWriteError(StoreError):
    """Snapshot could not be rewritten."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        super().__init__(
            f"Error writing snapshot {path}: {reason}.\n"
            f"Please run `watcher init` to generate necessary files."
        )


class ChangedFilesWriteError(StoreError):
    """Changed-files list could not be written."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        super().__init__(f"Error writing changed files list {path}: {reason}")


# Configuration Errors
class ConfigError(WatcherError):
    """Settings file is present but invalid."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        super().__init__(f"Invalid settings in {path}: {reason}")
