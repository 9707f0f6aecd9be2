"""Test helpers for building synthetic snapshot workspaces."""

import hashlib
import json
from pathlib import Path

import cbor2

from oci_dedup_stats.models import Layout
from oci_dedup_stats.oci.index import NAME_ANNOTATION
from oci_dedup_stats.oci.layout import Workspace


def hex_digest(content: bytes) -> str:
    """Get the bare sha256 hex digest of content."""
    return hashlib.sha256(content).hexdigest()


def write_blob(blob_dir: Path, content: bytes) -> str:
    """Store content under its own digest and return the digest."""
    blob_dir.mkdir(parents=True, exist_ok=True)
    digest = hex_digest(content)
    (blob_dir / digest).write_bytes(content)
    return digest


def write_sized_blobs(blob_dir: Path, blobs: dict[str, int]) -> None:
    """Create blobs with arbitrary names and sizes."""
    blob_dir.mkdir(parents=True, exist_ok=True)
    for name, size in blobs.items():
        (blob_dir / name).write_bytes(b"x" * size)


def make_blob_ref(digest: str, offset: int = 0, kind: int = 0) -> bytes:
    """Encode a puzzlefs blob reference record."""
    return offset.to_bytes(8, "little") + bytes([kind]) + bytes.fromhex(digest)


def make_index(manifests: list[tuple[str, str]]) -> str:
    """Build index.json text from (ref name, digest) pairs."""
    return json.dumps(
        {
            "schemaVersion": 2,
            "manifests": [
                {
                    "digest": digest,
                    "size": 0,
                    "mediaType": "application/vnd.puzzlefs.image.rootfs.v1",
                    "annotations": {NAME_ANNOTATION: name},
                }
                for name, digest in manifests
            ],
        }
    )


def write_chunked_image(
    workspace: Workspace,
    tag: str,
    metadata_blobs: list[bytes],
    chunks: list[bytes] = (),
    layer_name: str = "squashfs",
) -> list[str]:
    """Write a puzzlefs-like chunked image and return its metadata digests."""
    blob_dir = workspace.blob_dir(tag, Layout.CHUNKED)
    blob_dir.mkdir(parents=True, exist_ok=True)

    metadata_digests = [write_blob(blob_dir, content) for content in metadata_blobs]
    for chunk in chunks:
        write_blob(blob_dir, chunk)

    manifest = cbor2.dumps(
        {
            "metadatas": [
                make_blob_ref(digest, offset=i) for i, digest in enumerate(metadata_digests)
            ],
            "manifest_version": 1,
        }
    )
    manifest_digest = write_blob(blob_dir, manifest)

    workspace.index_path(tag, Layout.CHUNKED).write_text(
        make_index([(layer_name, f"sha256:{manifest_digest}")])
    )
    return metadata_digests


def write_plain_image(workspace: Workspace, tag: str, layers: list[bytes]) -> None:
    """Write an OCI image with one blob per layer."""
    blob_dir = workspace.blob_dir(tag, Layout.PLAIN)
    digests = [write_blob(blob_dir, layer) for layer in layers]
    workspace.index_path(tag, Layout.PLAIN).write_text(
        make_index([("barehost", f"sha256:{digests[0]}")])
    )
