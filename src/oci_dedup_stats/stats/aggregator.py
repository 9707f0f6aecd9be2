"""Cross-snapshot deduplication statistics."""

import logging
from typing import Iterable, Optional

from ..exceptions import ConsistencyError
from ..models import (
    BlobInfo,
    BlobOccurrence,
    DedupReport,
    Layout,
    LayoutStats,
    SnapshotMetadata,
)
from ..oci.index import resolve_layer_digest
from ..oci.layout import Workspace
from ..puzzlefs.manifest import load_metadata_digests
from ..store.scanner import blob_size, scan_blob_dir

logger = logging.getLogger(__name__)

DEFAULT_LAYER_NAME = "squashfs"


class OccurrenceTable:
    """Blob sizes and occurrence counts for one layout across snapshots.

    Digests are shared across snapshots: a blob present in three snapshots
    has a count of three and would be stored once in a unified store.
    Tables built from the same workspace can share one ``sizes`` map so a
    digest keeps a single size across layouts too.
    """

    def __init__(self, sizes: Optional[dict[str, int]] = None) -> None:
        self.blobs: dict[str, BlobOccurrence] = {}
        self.sizes: dict[str, int] = {} if sizes is None else sizes
        self.snapshot_sizes: dict[str, int] = {}

    def add_snapshot(self, tag: str, blobs: Iterable[BlobInfo]) -> None:
        """Record the blobs of one snapshot.

        Raises:
            ConsistencyError: If the snapshot was already added, or a digest
                shows up with a size different from an earlier observation
        """
        if tag in self.snapshot_sizes:
            raise ConsistencyError(f"Snapshot {tag!r} was already scanned")

        seen: set[str] = set()
        total = 0
        for blob in blobs:
            if blob.digest in seen:
                continue
            seen.add(blob.digest)
            total += blob.size

            known = self.sizes.setdefault(blob.digest, blob.size)
            if known != blob.size:
                raise ConsistencyError(
                    f"Blob {blob.digest} in snapshot {tag!r} has size {blob.size}, "
                    f"previously seen with size {known}"
                )

            occurrence = self.blobs.get(blob.digest)
            if occurrence is None:
                self.blobs[blob.digest] = BlobOccurrence(size=blob.size)
            else:
                occurrence.count += 1

        self.snapshot_sizes[tag] = total

    @property
    def snapshot_count(self) -> int:
        return len(self.snapshot_sizes)

    def total_size(self) -> int:
        """Sum of every snapshot's blob directory, without deduplication."""
        return sum(self.snapshot_sizes.values())

    def saved_size(self) -> int:
        """Bytes saved by storing each repeated blob only once."""
        return sum(
            (occurrence.count - 1) * occurrence.size
            for occurrence in self.blobs.values()
            if occurrence.count > 1
        )

    def to_stats(self, layout: Layout) -> LayoutStats:
        return LayoutStats(
            layout=layout,
            snapshot_count=self.snapshot_count,
            total_size=self.total_size(),
            saved_size=self.saved_size(),
        )


def build_occurrence_tables(
    workspace: Workspace, tags: Iterable[str]
) -> dict[Layout, OccurrenceTable]:
    """Scan every snapshot's blob directory for every layout.

    All directories are scanned before anything is returned, so a missing
    directory for any snapshot aborts the run without partial totals.

    Raises:
        BlobStoreError: If any blob directory cannot be scanned
        ConsistencyError: If a digest is seen with two sizes, in any
            snapshot or layout
    """
    sizes: dict[str, int] = {}
    tables = {layout: OccurrenceTable(sizes) for layout in Layout}

    for tag in tags:
        for layout, table in tables.items():
            blob_dir = workspace.blob_dir(tag, layout)
            logger.info(f"Scanning {layout.label} blobs of {tag}")
            table.add_snapshot(tag, scan_blob_dir(blob_dir))

    return tables


def compute_layout_stats(tables: dict[Layout, OccurrenceTable]) -> list[LayoutStats]:
    """Compute raw, saved and mashed-together sizes per layout."""
    return [table.to_stats(layout) for layout, table in tables.items()]


def compute_metadata_size(
    workspace: Workspace, tag: str, layer_name: str = DEFAULT_LAYER_NAME
) -> SnapshotMetadata:
    """Sum the sizes of the metadata blobs of a snapshot's chunked image.

    Args:
        workspace: Working directory holding the snapshots
        tag: Snapshot to inspect
        layer_name: Reference name of the rootfs in the chunked index

    Returns:
        Referenced metadata digests and their total size

    Raises:
        LayerNotFoundError: If the index has no manifest named ``layer_name``
        ParseError: If the index or rootfs manifest is malformed
        BlobStoreError: If a referenced blob cannot be read
    """
    blob_dir = workspace.blob_dir(tag, Layout.CHUNKED)
    manifest_digest = resolve_layer_digest(
        workspace.index_path(tag, Layout.CHUNKED), layer_name
    )
    digests = load_metadata_digests(blob_dir / manifest_digest)

    size = sum(blob_size(blob_dir, digest) for digest in digests)
    logger.debug(f"{tag}: {len(digests)} metadata blobs, {size} bytes")
    return SnapshotMetadata(tag=tag, digests=digests, size=size)


def generate_report(
    workspace: Workspace, tags: Iterable[str], layer_name: str = DEFAULT_LAYER_NAME
) -> DedupReport:
    """Run the full analysis over the configured snapshots."""
    tags = list(tags)
    tables = build_occurrence_tables(workspace, tags)
    layouts = compute_layout_stats(tables)
    metadata = [compute_metadata_size(workspace, tag, layer_name) for tag in tags]
    return DedupReport(layouts=layouts, metadata=metadata)
