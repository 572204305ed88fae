"""Directory traversal strategies used by the scanner.

The scanner only asks a traversal for file paths; how directories are
walked lives here so the diff logic never depends on it.
"""

import logging
import os
from pathlib import Path
from typing import List, Optional, Protocol

from .errors import ScanError
from .ignore import IgnoreSpec

logger = logging.getLogger(__name__)


class Traversal(Protocol):
    """
    Protocol for directory traversal strategies.

    Implementations return the joined path of every file to hash and raise
    ScanError when a directory cannot be listed.
    """

    def iter_files(self, directory: Path) -> List[Path]:
        """
        List files to hash under a directory.

        Args:
            directory: Directory to scan, as passed by the caller

        Returns:
            Paths joined onto `directory`, in name order
        """
        ...


def _list_dir(directory: Path) -> List[os.DirEntry]:
    try:
        with os.scandir(directory) as it:
            return sorted(it, key=lambda e: e.name)
    except OSError as e:
        raise ScanError(directory, e.strerror or str(e)) from e


class FlatTraversal:
    """Immediate entries only; subdirectories are skipped, not recursed into."""

    def __init__(self, ignore: Optional[IgnoreSpec] = None):
        self.ignore = ignore

    def iter_files(self, directory: Path) -> List[Path]:
        files = []
        for entry in _list_dir(directory):
            # Symlinks are not followed here; a link to a directory fails
            # at read time and is reported as a skipped file.
            if entry.is_dir(follow_symlinks=False):
                continue
            if self.ignore and self.ignore.is_ignored(entry.name):
                logger.debug("Ignoring %s", entry.name)
                continue
            files.append(directory / entry.name)
        return files


class RecursiveTraversal:
    """Walk every subdirectory not excluded by the ignore spec."""

    def __init__(self, ignore: Optional[IgnoreSpec] = None):
        self.ignore = ignore

    def iter_files(self, directory: Path) -> List[Path]:
        files = []
        self._walk(directory, "", files)
        return files

    def _walk(self, directory: Path, prefix: str, files: List[Path]) -> None:
        for entry in _list_dir(directory):
            relpath = f"{prefix}{entry.name}"
            if entry.is_dir(follow_symlinks=False):
                if self.ignore and not self.ignore.should_traverse(relpath):
                    logger.debug("Pruning directory %s", relpath)
                    continue
                self._walk(directory / entry.name, f"{relpath}/", files)
                continue
            if self.ignore and self.ignore.is_ignored(relpath):
                logger.debug("Ignoring %s", relpath)
                continue
            files.append(directory / entry.name)
