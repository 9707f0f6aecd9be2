"""OCI dedup stats - measure deduplication of chunked container images."""

__version__ = "0.1.0"

from .config import AnalysisConfig
from .exceptions import (
    BlobStoreError,
    ConfigError,
    ConsistencyError,
    DedupStatsError,
    ExternalToolError,
    IndexParseError,
    LayerNotFoundError,
    ManifestParseError,
    NotFoundError,
    ParseError,
)
from .models import ChunkBounds, DedupReport, Layout, LayoutStats, SnapshotMetadata
from .pipeline import Pipeline
from .stats import format_report, generate_report

__all__ = [
    "AnalysisConfig",
    "ChunkBounds",
    "DedupReport",
    "Layout",
    "LayoutStats",
    "SnapshotMetadata",
    "Pipeline",
    "generate_report",
    "format_report",
    "DedupStatsError",
    "NotFoundError",
    "LayerNotFoundError",
    "BlobStoreError",
    "ParseError",
    "IndexParseError",
    "ManifestParseError",
    "ConsistencyError",
    "ConfigError",
    "ExternalToolError",
]
