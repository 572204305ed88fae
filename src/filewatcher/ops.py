"""Core operations for filewatcher."""

import logging
import re
from pathlib import Path
from typing import Optional, Union

from .config import StoreConfig, WatcherSettings, load_settings
from .core import CycleResult, Snapshot
from .diffing import compute_changes
from .ignore import IgnoreSpec
from .scanner import scan_directory
from .store import SnapshotStore
from .traversal import FlatTraversal, RecursiveTraversal, Traversal

logger = logging.getLogger(__name__)


def storage_ignore_pattern(directory: Union[str, Path], storage_dir: Path) -> Optional[str]:
    """Anchored pattern excluding the storage directory from a scan of `directory`.

    Returns None when the storage directory is not inside the scanned tree.
    """
    try:
        rel = Path(storage_dir).resolve().relative_to(Path(directory).resolve())
    except ValueError:
        return None
    if rel == Path("."):
        return None
    # Escape glob metacharacters so the directory name matches literally
    escaped = re.sub(r"([\[\]*?\\])", r"\\\1", rel.as_posix())
    return f"/{escaped}/"


def build_traversal(
    directory: Union[str, Path],
    settings: WatcherSettings,
    recursive: Optional[bool] = None,
    storage_dir: Optional[Path] = None,
) -> Traversal:
    """Pick the traversal for a scan.

    `recursive` overrides the settings file when given. The store's own
    directory is pruned when it sits inside the scanned tree; same-named
    directories elsewhere are still scanned.
    """
    if storage_dir is None:
        storage_dir = StoreConfig().storage_dir
    extra = list(settings.ignore)
    pattern = storage_ignore_pattern(directory, storage_dir)
    if pattern is not None:
        extra.append(pattern)

    ignore = IgnoreSpec(Path(directory), extra=extra)
    if recursive is None:
        recursive = settings.recursive
    if recursive:
        return RecursiveTraversal(ignore)
    return FlatTraversal(ignore)


def run_cycle(
    directory: Union[str, Path],
    config: Optional[StoreConfig] = None,
    traversal: Optional[Traversal] = None,
    recursive: Optional[bool] = None,
) -> CycleResult:
    """Run one scan -> load -> diff -> save cycle.

    Args:
        directory: Directory to scan
        config: Storage locations (default: ./watcher/...)
        traversal: Explicit traversal; when omitted one is built from the
            settings file and `recursive`
        recursive: Override the settings file's `recursive` flag

    Returns:
        CycleResult with the scan report and the Changed/NoChanges outcome

    Raises:
        WatcherError: On any fatal condition (listing, load, or save failure)
    """
    config = config or StoreConfig()
    if traversal is None:
        traversal = build_traversal(directory, load_settings(config), recursive, config.storage_dir)

    report = scan_directory(directory, traversal)
    current = report.digests

    store = SnapshotStore(config)
    previous = store.load()
    changed = compute_changes(previous.files, current)
    logger.debug(
        "Scanned %d files (%d skipped), %d changed vs %d in snapshot",
        len(current), len(report.skipped), len(changed), len(previous.files),
    )

    outcome = store.save(current, changed)
    return CycleResult(report=report, outcome=outcome)


def init_store(config: Optional[StoreConfig] = None) -> None:
    """Create the storage directory and empty artifacts."""
    SnapshotStore(config).init()


def clear_snapshot(config: Optional[StoreConfig] = None) -> None:
    """Reset the snapshot so the next run treats every file as new."""
    SnapshotStore(config).clear()


def load_snapshot(config: Optional[StoreConfig] = None) -> Snapshot:
    """Load the persisted snapshot."""
    return SnapshotStore(config).load()
