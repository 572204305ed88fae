"""Diff computation logic - stable module for computing changed files."""

from .core import FileDigestMap


def compute_changes(previous: FileDigestMap, current: FileDigestMap) -> FileDigestMap:
    """
    Compute the changed set between the last snapshot and a fresh scan.

    Args:
        previous: Digests from the persisted snapshot.
        current: Digests from the current scan.

    Returns:
        Entries of `current` that are new or whose digest differs. When
        `previous` is empty every current file counts as changed.

    Note:
        Paths missing from `current` (deleted files) are never reported
        and are left for the next full snapshot rewrite to drop.
    """
    if not previous:
        return dict(current)

    changed = {}
    for path, digest in current.items():
        if previous.get(path) != digest:
            changed[path] = digest
    return changed
