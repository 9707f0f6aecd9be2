"""On-disk layout of the per-snapshot working directories."""

from pathlib import Path
from typing import Union

from ..models import Layout

BLOBS_SUBDIR = Path("blobs/sha256")
INDEX_FILE = "index.json"
ROOTFS_SUBDIR = "rfs"


class Workspace:
    """Paths of every snapshot's images under one working directory.

    Each snapshot gets ``<root>/<tag>/`` holding one OCI image directory
    per layout plus the unpacked root filesystem::

        <tag>/oci/index.json
        <tag>/oci/blobs/sha256/<hex>
        <tag>/oci2/index.json
        <tag>/oci2/blobs/sha256/<hex>
        <tag>/rfs/rootfs/
    """

    def __init__(self, root: Union[str, Path]) -> None:
        self.root = Path(root)

    def snapshot_dir(self, tag: str) -> Path:
        return self.root / tag

    def image_dir(self, tag: str, layout: Layout) -> Path:
        return self.snapshot_dir(tag) / layout.value

    def blob_dir(self, tag: str, layout: Layout) -> Path:
        return self.image_dir(tag, layout) / BLOBS_SUBDIR

    def index_path(self, tag: str, layout: Layout) -> Path:
        return self.image_dir(tag, layout) / INDEX_FILE

    def rootfs_dir(self, tag: str) -> Path:
        return self.snapshot_dir(tag) / ROOTFS_SUBDIR

    def __repr__(self) -> str:
        return f"Workspace({str(self.root)!r})"
