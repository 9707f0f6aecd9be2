"""OCI image layout helpers."""

from .index import find_manifest_digest, parse_index, resolve_layer_digest
from .layout import Workspace

__all__ = ["Workspace", "find_manifest_digest", "parse_index", "resolve_layer_digest"]
