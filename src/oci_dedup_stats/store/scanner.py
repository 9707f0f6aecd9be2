"""Content-addressed blob directory scanning."""

import logging
import os
from pathlib import Path

from ..exceptions import BlobStoreError
from ..models import BlobInfo

logger = logging.getLogger(__name__)


def scan_blob_dir(blob_dir: Path) -> list[BlobInfo]:
    """List every blob in a flat content-addressed directory.

    Args:
        blob_dir: Directory whose entry names are digests

    Returns:
        One BlobInfo per entry, sorted by digest

    Raises:
        BlobStoreError: If the directory or any entry cannot be read
    """
    blobs = []
    try:
        with os.scandir(blob_dir) as entries:
            for entry in entries:
                size = entry.stat().st_size
                blobs.append(BlobInfo(digest=entry.name, size=size))
    except OSError as e:
        raise BlobStoreError(f"Can't scan blob directory {blob_dir}: {e}") from e

    blobs.sort(key=lambda blob: blob.digest)
    logger.debug(f"Scanned {len(blobs)} blobs in {blob_dir}")
    return blobs


def blob_size(blob_dir: Path, digest: str) -> int:
    """Get the size of a single blob.

    Raises:
        BlobStoreError: If the blob does not exist or cannot be read
    """
    if not digest or "/" in digest:
        raise BlobStoreError(f"Invalid blob name {digest!r} in {blob_dir}")

    path = Path(blob_dir) / digest
    try:
        return path.stat().st_size
    except OSError as e:
        raise BlobStoreError(f"Can't stat blob {path}: {e}") from e
