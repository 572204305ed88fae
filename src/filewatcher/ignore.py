"""Gitignore-style pattern matching for scanned directories."""

from pathlib import Path
from typing import Iterable

from pathspec import PathSpec
from pathspec.patterns import GitWildMatchPattern

from .errors import ConfigError


IGNORE_FILE = ".watcherignore"

# Directory-only patterns; they never affect a flat scan, which skips
# subdirectories anyway. The storage directory is excluded per scan, anchored
# to its real location (see ops.build_traversal).
DEFAULTS = [
    ".git/",
]


class IgnoreSpec:
    """Manages gitignore-style patterns for file exclusion."""

    def __init__(self, root: Path, extra: Iterable[str] = ()):
        """Initialize ignore spec with default and custom patterns.

        Args:
            root: Directory being scanned
            extra: Additional patterns (e.g. from config.yaml)

        Raises:
            ConfigError: If the directory's .watcherignore can't be read
        """
        self.root = Path(root)
        patterns = list(DEFAULTS)

        ignore_file = self.root / IGNORE_FILE
        if ignore_file.is_file():
            try:
                content = ignore_file.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                raise ConfigError(ignore_file, getattr(e, "strerror", None) or str(e)) from e
            for line in content.splitlines():
                line = line.strip()
                if line and not line.startswith("#"):
                    patterns.append(line)

        patterns.extend(extra)
        self.patterns = patterns
        self.spec = PathSpec.from_lines(GitWildMatchPattern, patterns)

    def is_ignored(self, relpath: str) -> bool:
        """Check if a root-relative POSIX path should be ignored."""
        return self.spec.match_file(relpath)

    def should_traverse(self, dirpath: str) -> bool:
        """Check if a root-relative directory should be descended into."""
        if not dirpath.endswith("/"):
            dirpath = dirpath + "/"
        return not self.spec.match_file(dirpath)
