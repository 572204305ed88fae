"""Digest computation for a directory's files."""

import logging
from pathlib import Path
from typing import Optional, Union

from .core import ScanEntry, ScanReport
from .hashing import compute_file_digest
from .traversal import FlatTraversal, Traversal

logger = logging.getLogger(__name__)


def scan_directory(
    directory: Union[str, Path],
    traversal: Optional[Traversal] = None,
) -> ScanReport:
    """
    Hash every file the traversal yields for `directory`.

    Args:
        directory: Directory to scan. Its spelling is kept in the resulting
            keys, e.g. "src" produces "src/a.txt".
        traversal: Strategy for listing files (default: FlatTraversal).

    Returns:
        ScanReport with one entry per file. Files that cannot be opened or
        read are recorded in ScanReport.skipped for the caller to surface,
        never raised.

    Raises:
        ScanError: If the directory itself cannot be listed.
    """
    directory = Path(directory)
    if traversal is None:
        traversal = FlatTraversal()

    entries = []
    for path in traversal.iter_files(directory):
        key = path.as_posix()
        try:
            digest = compute_file_digest(path)
        except OSError as e:
            reason = e.strerror or str(e)
            logger.debug("Error hashing file %s: %s", key, reason)
            entries.append(ScanEntry(path=key, error=reason))
            continue
        logger.debug("Hashed %s: %s", key, digest[:12])
        entries.append(ScanEntry(path=key, digest=digest))

    return ScanReport(directory=directory.as_posix(), entries=entries)
