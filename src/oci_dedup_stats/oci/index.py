"""OCI image index parsing and layer name resolution."""

import json
from pathlib import Path
from typing import Any, Optional

from ..exceptions import BlobStoreError, IndexParseError, LayerNotFoundError, ParseError
from ..utils.digest import DEFAULT_ALGORITHM, split_digest

NAME_ANNOTATION = "org.opencontainers.image.ref.name"


def parse_index(index_text: str) -> dict[str, Any]:
    """Parse an OCI image index document.

    Args:
        index_text: JSON text of ``index.json``

    Returns:
        Decoded index with a ``manifests`` list

    Raises:
        IndexParseError: If the text is not an index document
    """
    try:
        index = json.loads(index_text)
    except (json.JSONDecodeError, TypeError) as e:
        raise IndexParseError(f"Invalid JSON in image index: {e}") from e

    if not isinstance(index, dict):
        raise IndexParseError("Image index must be a JSON object")

    manifests = index.get("manifests")
    if not isinstance(manifests, list):
        raise IndexParseError("Image index has no 'manifests' list")

    for manifest in manifests:
        if not isinstance(manifest, dict):
            raise IndexParseError("Invalid manifest entry in image index")

    return index


def get_ref_name(manifest: dict[str, Any]) -> Optional[str]:
    """Get the reference name annotation of a manifest descriptor."""
    annotations = manifest.get("annotations")
    if annotations is None:
        return None
    if not isinstance(annotations, dict):
        raise IndexParseError("Manifest annotations must be a JSON object")
    return annotations.get(NAME_ANNOTATION)


def find_manifest_digest(
    index_text: str, name: str, algorithm: str = DEFAULT_ALGORITHM
) -> Optional[str]:
    """Find the digest of the first manifest annotated with ``name``.

    Args:
        index_text: JSON text of ``index.json``
        name: Reference name to look for (e.g. "squashfs")
        algorithm: Digest algorithm the matching manifest must use

    Returns:
        Hex part of the manifest digest, or None if no manifest matches

    Raises:
        IndexParseError: If the index or the matching digest is malformed
    """
    index = parse_index(index_text)

    for manifest in index["manifests"]:
        if get_ref_name(manifest) != name:
            continue

        try:
            return split_digest(manifest.get("digest"), algorithm)
        except ParseError as e:
            raise IndexParseError(f"Manifest {name!r}: {e}") from e

    return None


def read_index(index_path: Path) -> str:
    """Read the text of an image index file."""
    try:
        return Path(index_path).read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise IndexParseError(f"Image index {index_path} is not UTF-8: {e}") from e
    except OSError as e:
        raise BlobStoreError(f"Cannot read image index {index_path}: {e}") from e


def resolve_layer_digest(
    index_path: Path, name: str, algorithm: str = DEFAULT_ALGORITHM
) -> str:
    """Resolve a layer name to its blob digest using an index file.

    Args:
        index_path: Path to ``index.json``
        name: Reference name of the layer
        algorithm: Expected digest algorithm

    Returns:
        Hex digest of the blob holding the layer's manifest

    Raises:
        BlobStoreError: If the index file cannot be read
        IndexParseError: If the index is malformed
        LayerNotFoundError: If no manifest carries the name
    """
    index_text = read_index(index_path)
    try:
        digest = find_manifest_digest(index_text, name, algorithm)
    except IndexParseError as e:
        raise IndexParseError(f"{index_path}: {e}") from e

    if digest is None:
        raise LayerNotFoundError(f"No manifest named {name!r} in {index_path}")
    return digest
