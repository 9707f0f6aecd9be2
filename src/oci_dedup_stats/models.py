"""Data models for blob stores and dedup statistics."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class Layout(Enum):
    """Storage layout of a snapshot's OCI image directory."""

    PLAIN = "oci"  # per-layer blobs as copied by skopeo
    CHUNKED = "oci2"  # content-defined-chunked blobs built by puzzlefs

    @property
    def label(self) -> str:
        return self.name.lower()


@dataclass(frozen=True)
class BlobInfo:
    """A content-addressed blob found in a blob directory."""

    digest: str
    size: int


@dataclass
class BlobOccurrence:
    """Size of a blob and the number of snapshots it appears in."""

    size: int
    count: int = 1


@dataclass
class LayoutStats:
    """Deduplication totals for one storage layout."""

    layout: Layout
    snapshot_count: int
    total_size: int
    saved_size: int

    @property
    def mashed_size(self) -> int:
        """Size of all snapshots stored together in one blob store."""
        return self.total_size - self.saved_size

    @property
    def average_size(self) -> float:
        if self.snapshot_count == 0:
            return 0.0
        return self.total_size / self.snapshot_count


@dataclass
class SnapshotMetadata:
    """Metadata blobs referenced by one snapshot's chunked image."""

    tag: str
    digests: list[str]
    size: int


@dataclass
class DedupReport:
    """Complete result of one analysis run."""

    layouts: list[LayoutStats] = field(default_factory=list)
    metadata: list[SnapshotMetadata] = field(default_factory=list)


@dataclass(frozen=True)
class ChunkBounds:
    """FastCDC parameters passed to the chunked image builder."""

    min: Optional[int] = None
    avg: Optional[int] = None
    max: Optional[int] = None

    def is_complete(self) -> bool:
        return None not in (self.min, self.avg, self.max)

    def as_options(self) -> list[str]:
        """Build command-line options for the parameters that are set."""
        options = []
        for name in ("min", "avg", "max"):
            value = getattr(self, name)
            if value is not None:
                options.append(f"--{name}={value}")
        return options
