"""Content-hash based change detection for a single directory."""

from .constants import WATCHER_VERSION
from .core import Changed, CycleResult, NoChanges, ScanEntry, ScanReport, Snapshot
from .ops import run_cycle

__version__ = WATCHER_VERSION

__all__ = [
    "Changed",
    "CycleResult",
    "NoChanges",
    "ScanEntry",
    "ScanReport",
    "Snapshot",
    "run_cycle",
    "__version__",
]
