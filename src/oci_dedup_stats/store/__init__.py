"""Blob store access."""

from .scanner import blob_size, scan_blob_dir

__all__ = ["blob_size", "scan_blob_dir"]
