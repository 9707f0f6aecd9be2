"""Readers for puzzlefs chunked image blobs."""

from .manifest import decode_blob_ref, load_metadata_digests, read_metadata_digests

__all__ = ["decode_blob_ref", "load_metadata_digests", "read_metadata_digests"]
