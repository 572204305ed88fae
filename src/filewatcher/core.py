"""Core data models for filewatcher.

Scan -> Diff -> Save:
---------------------
A scan produces a ScanReport: one ScanEntry per file, holding either the
content digest or the reason the file could not be read. The successful
entries form the current FileDigestMap, which is compared against the
persisted Snapshot. Saving yields an Outcome: Changed with the changed set,
or NoChanges when nothing differs.
"""

import json
from typing import Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator, model_validator

from .hashing import is_valid_digest


# path -> 64-char hex digest
FileDigestMap = Dict[str, str]


# ============= Scanning =============

class ScanEntry(BaseModel):
    """Result of hashing a single file: a digest or a failure reason."""

    path: str
    digest: Optional[str] = None
    error: Optional[str] = None

    @model_validator(mode="after")
    def check_exactly_one(self) -> "ScanEntry":
        if (self.digest is None) == (self.error is None):
            raise ValueError("ScanEntry needs exactly one of digest or error")
        return self

    @property
    def ok(self) -> bool:
        return self.digest is not None


class ScanReport(BaseModel):
    """All entries produced by one directory scan."""

    directory: str
    entries: List[ScanEntry] = Field(default_factory=list)

    @property
    def digests(self) -> FileDigestMap:
        """Current FileDigestMap (successfully hashed files only)."""
        return {e.path: e.digest for e in self.entries if e.ok}

    @property
    def skipped(self) -> List[ScanEntry]:
        """Entries that could not be read."""
        return [e for e in self.entries if not e.ok]


# ============= Snapshot =============

class Snapshot(BaseModel):
    """
    Persisted FileDigestMap (stored in watcher/prev.json).

    On disk this is the bare mapping, pretty-printed with 2-space indent.
    """

    files: FileDigestMap = Field(default_factory=dict)

    @field_validator("files")
    @classmethod
    def check_digests(cls, files: FileDigestMap) -> FileDigestMap:
        for path, digest in files.items():
            if not is_valid_digest(digest):
                raise ValueError(f"invalid digest for {path!r}: {digest!r}")
        return files

    @property
    def is_empty(self) -> bool:
        return not self.files

    def to_json(self) -> str:
        """Serialize as stable, human-readable JSON ("{}" when empty)."""
        return json.dumps(self.files, indent=2, sort_keys=True, ensure_ascii=False)


# ============= Outcomes =============

class Changed(BaseModel):
    """At least one file changed; the snapshot was rewritten."""

    kind: Literal["changed"] = "changed"
    changed: FileDigestMap

    @property
    def paths(self) -> List[str]:
        return sorted(self.changed)


class NoChanges(BaseModel):
    """Nothing changed; the snapshot was left untouched."""

    kind: Literal["no_changes"] = "no_changes"


Outcome = Union[Changed, NoChanges]


class CycleResult(BaseModel):
    """Everything one scan-diff-save cycle produced."""

    report: ScanReport
    outcome: Union[Changed, NoChanges] = Field(discriminator="kind")

    @property
    def has_changes(self) -> bool:
        return isinstance(self.outcome, Changed)
