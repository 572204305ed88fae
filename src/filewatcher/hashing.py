"""Hashing utilities for file content digests.

Digests are plain lowercase hex SHA-256 strings (64 characters). Any change
to a file's bytes produces a different digest; timestamps are never consulted.
"""

from pathlib import Path
from typing import Union
import hashlib
import re

from .constants import CHUNK_SIZE

DIGEST_PATTERN = re.compile(r"^[0-9a-f]{64}$")


def compute_file_digest(path: Union[str, Path]) -> str:
    """Compute SHA256 hash of file contents.

    The file is streamed in fixed-size chunks and the handle is closed
    before returning, whether or not the read succeeded.

    Args:
        path: Path to file to hash

    Returns:
        64-character lowercase hex digest

    Raises:
        OSError: If the file cannot be opened or read
    """
    sha256 = hashlib.sha256()
    with Path(path).open("rb") as f:
        for chunk in iter(lambda: f.read(CHUNK_SIZE), b""):
            sha256.update(chunk)
    return sha256.hexdigest()


def is_valid_digest(value: str) -> bool:
    """Check that a value looks like a digest produced by compute_file_digest."""
    return isinstance(value, str) and DIGEST_PATTERN.match(value) is not None


__all__ = [
    "compute_file_digest",
    "is_valid_digest",
]
