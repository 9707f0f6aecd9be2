"""Decoding of puzzlefs rootfs manifests.

The manifest blob of a chunked image is a CBOR map whose ``metadatas``
field lists references to the image's metadata blobs. Each reference is a
raw byte string laid out as::

    [8-byte offset][1-byte kind][digest]

Only the digest is needed to size the metadata blobs.
"""

from pathlib import Path
from typing import Any

import cbor2

from ..exceptions import BlobStoreError, ManifestParseError

METADATAS_FIELD = "metadatas"

BLOB_REF_OFFSET_SIZE = 8
BLOB_REF_KIND_SIZE = 1
BLOB_REF_HEADER_SIZE = BLOB_REF_OFFSET_SIZE + BLOB_REF_KIND_SIZE


def decode_blob_ref(raw: bytes) -> str:
    """Extract the digest from a raw blob reference record.

    Args:
        raw: Encoded reference record

    Returns:
        Lowercase hex digest following the offset and kind prefix

    Raises:
        ManifestParseError: If the record is not bytes or is too short
    """
    if not isinstance(raw, (bytes, bytearray)):
        raise ManifestParseError(
            f"Blob reference must be a byte string, got {type(raw).__name__}"
        )
    if len(raw) < BLOB_REF_HEADER_SIZE:
        raise ManifestParseError(
            f"Blob reference is {len(raw)} bytes, "
            f"expected at least {BLOB_REF_HEADER_SIZE}"
        )
    return bytes(raw[BLOB_REF_HEADER_SIZE:]).hex()


def decode_manifest(data: bytes) -> dict[Any, Any]:
    """Decode a rootfs manifest blob into its CBOR map."""
    try:
        manifest = cbor2.loads(data)
    except (cbor2.CBORDecodeError, ValueError) as e:
        raise ManifestParseError(f"Invalid CBOR in rootfs manifest: {e}") from e

    if not isinstance(manifest, dict):
        raise ManifestParseError("Rootfs manifest must be a CBOR map")
    return manifest


def read_metadata_digests(data: bytes) -> list[str]:
    """List the metadata blob digests referenced by a rootfs manifest.

    Args:
        data: Raw manifest blob

    Returns:
        Digests in manifest order

    Raises:
        ManifestParseError: If the manifest or any reference is malformed
    """
    manifest = decode_manifest(data)

    metadatas = manifest.get(METADATAS_FIELD)
    if not isinstance(metadatas, list):
        raise ManifestParseError(
            f"Rootfs manifest has no '{METADATAS_FIELD}' list"
        )

    return [decode_blob_ref(raw) for raw in metadatas]


def load_metadata_digests(manifest_path: Path) -> list[str]:
    """Read a rootfs manifest blob from disk and list its metadata digests."""
    try:
        data = Path(manifest_path).read_bytes()
    except OSError as e:
        raise BlobStoreError(f"Cannot read rootfs manifest {manifest_path}: {e}") from e

    try:
        return read_metadata_digests(data)
    except ManifestParseError as e:
        raise ManifestParseError(f"{manifest_path}: {e}") from e
