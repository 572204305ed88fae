"""Snapshot store: owns reading and writing the persisted artifacts.

Layout (default StoreConfig):

    watcher/prev.json          last snapshot, path -> digest
    watcher/changed_files.txt  paths changed in the last run, one per line

The snapshot is only rewritten when something changed. The changed-files
list is rewritten on every run, and emptied when nothing changed.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Iterable, List, Optional

from pydantic import ValidationError

from .config import StoreConfig
from .constants import EMPTY_SNAPSHOT_TEXT
from .core import Changed, FileDigestMap, NoChanges, Outcome, Snapshot
from .errors import (
    ChangedFilesWriteError,
    SnapshotCorruptError,
    SnapshotReadError,
    SnapshotWriteError,
    StoreError,
    StoreNotInitializedError,
)

logger = logging.getLogger(__name__)


# ============= Atomic Write Helpers =============

def _atomic_write_text(path: Path, text: str) -> None:
    """Atomically write text to file with crash safety.

    1. Writes to temp file with fsync to ensure content is on disk
    2. Atomic rename to target path (appears all-at-once)
    3. Fsync parent directory to ensure rename is durable

    The parent directory must already exist; a missing storage directory
    means the store was never initialized and must surface as an error.
    Text is encoded with surrogateescape so paths read from the filesystem
    with undecodable bytes are written back byte-for-byte. The temp file
    is removed if any step before the rename fails.

    Args:
        path: Target file path
        text: Text content to write
    """
    tmp = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            errors="surrogateescape",
            delete=False,
            dir=path.parent,
            prefix=f".{path.name}.tmp-",
            suffix=""
        ) as f:
            tmp = Path(f.name)
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp, path)
    except BaseException:
        if tmp is not None:
            tmp.unlink(missing_ok=True)
        raise

    # Directory fsync is best-effort (unsupported on Windows)
    try:
        flags = os.O_RDONLY
        if hasattr(os, "O_DIRECTORY"):
            flags |= os.O_DIRECTORY
        dirfd = os.open(str(path.parent), flags)
        try:
            os.fsync(dirfd)
        finally:
            os.close(dirfd)
    except OSError:
        logger.debug("Directory fsync not supported for %s", path.parent)


# Failures a write can raise: I/O errors, and text that can't be encoded
WRITE_ERRORS = (OSError, UnicodeError)


def _reason(e: Exception) -> str:
    return getattr(e, "strerror", None) or str(e)


# ============= Store =============

class SnapshotStore:
    """Loads, diffs against, and persists the directory snapshot."""

    def __init__(self, config: Optional[StoreConfig] = None):
        self.config = config or StoreConfig()

    @property
    def snapshot_path(self) -> Path:
        return self.config.snapshot_path

    @property
    def changed_files_path(self) -> Path:
        return self.config.changed_files_path

    def is_initialized(self) -> bool:
        return self.config.storage_dir.is_dir()

    def _require_storage_dir(self) -> None:
        if not self.is_initialized():
            raise StoreNotInitializedError(self.config.storage_dir)

    # ----- lifecycle -----

    def init(self) -> None:
        """Create the storage directory with an empty snapshot and changed list."""
        storage_dir = self.config.storage_dir
        try:
            storage_dir.mkdir(parents=True, exist_ok=True)
            _atomic_write_text(self.snapshot_path, EMPTY_SNAPSHOT_TEXT)
            _atomic_write_text(self.changed_files_path, "")
        except WRITE_ERRORS as e:
            raise StoreError(
                f"Error initializing watcher structure at {storage_dir}: {_reason(e)}"
            ) from e
        logger.info("Initialized watcher storage at %s", storage_dir)

    def clear(self) -> None:
        """Reset the snapshot to an empty mapping; changed list is untouched."""
        self._require_storage_dir()
        try:
            _atomic_write_text(self.snapshot_path, EMPTY_SNAPSHOT_TEXT)
        except WRITE_ERRORS as e:
            raise SnapshotWriteError(self.snapshot_path, _reason(e)) from e
        logger.info("Cleared snapshot %s", self.snapshot_path)

    # ----- snapshot -----

    def _read_snapshot_text(self) -> Optional[str]:
        try:
            return self.snapshot_path.read_text(encoding="utf-8", errors="surrogateescape")
        except FileNotFoundError:
            return None
        except OSError as e:
            raise SnapshotReadError(self.snapshot_path, _reason(e)) from e

    def load(self) -> Snapshot:
        """
        Load the persisted snapshot.

        Returns:
            The snapshot, or an empty one if no snapshot file exists yet.

        Raises:
            SnapshotReadError: If the file exists but cannot be read.
            SnapshotCorruptError: If the file is not a path -> digest mapping.
        """
        text = self._read_snapshot_text()
        if text is None:
            logger.debug("No snapshot at %s, starting empty", self.snapshot_path)
            return Snapshot()

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise SnapshotCorruptError(self.snapshot_path, f"invalid JSON ({e})") from e

        if not isinstance(data, dict):
            raise SnapshotCorruptError(self.snapshot_path, "expected a JSON object")

        try:
            return Snapshot(files=data)
        except ValidationError as e:
            errors = "; ".join(err["msg"] for err in e.errors())
            raise SnapshotCorruptError(self.snapshot_path, errors) from e

    def _restore_snapshot(self, previous_text: Optional[str]) -> None:
        try:
            if previous_text is None:
                self.snapshot_path.unlink(missing_ok=True)
            else:
                _atomic_write_text(self.snapshot_path, previous_text)
        except WRITE_ERRORS as e:
            logger.error("Could not restore snapshot %s: %s", self.snapshot_path, _reason(e))

    # ----- changed files -----

    def _write_changed_files(self, paths: Iterable[str]) -> None:
        text = "".join(f"{p}\n" for p in paths)
        try:
            _atomic_write_text(self.changed_files_path, text)
        except WRITE_ERRORS as e:
            raise ChangedFilesWriteError(self.changed_files_path, _reason(e)) from e

    def load_changed_files(self) -> List[str]:
        """Read the changed-files list written by the last run."""
        try:
            with self.changed_files_path.open(encoding="utf-8", errors="surrogateescape") as f:
                return [line.strip() for line in f if line.strip()]
        except FileNotFoundError:
            return []

    # ----- save -----

    def save(self, current: FileDigestMap, changed: FileDigestMap) -> Outcome:
        """
        Persist the result of a diff.

        With no changes the snapshot is left as-is and the changed-files list
        is emptied. Otherwise the snapshot is replaced by `current` in full
        and the changed-files list names exactly the changed paths. If the
        list cannot be written after the snapshot was replaced, the previous
        snapshot is put back so neither artifact moves.

        Raises:
            StoreNotInitializedError: If the storage directory is missing.
            SnapshotWriteError: If the snapshot cannot be rewritten.
            ChangedFilesWriteError: If the changed-files list cannot be written.
        """
        for path, digest in changed.items():
            if current.get(path) != digest:
                raise ValueError(f"Changed entry {path!r} does not match the current scan")

        self._require_storage_dir()

        if not changed:
            self._write_changed_files([])
            logger.info("No changes detected; snapshot left untouched")
            return NoChanges()

        previous_text = self._read_snapshot_text()
        snapshot = Snapshot(files=current)
        try:
            _atomic_write_text(self.snapshot_path, snapshot.to_json())
        except WRITE_ERRORS as e:
            raise SnapshotWriteError(self.snapshot_path, _reason(e)) from e

        try:
            self._write_changed_files(sorted(changed))
        except ChangedFilesWriteError:
            self._restore_snapshot(previous_text)
            raise

        logger.info("Snapshot rewritten with %d files, %d changed", len(current), len(changed))
        return Changed(changed=changed)
