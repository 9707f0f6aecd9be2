"""Custom exceptions for the deduplication statistics tool."""


class DedupStatsError(Exception):
    """Base exception for all dedup-statistics errors."""

    pass


class NotFoundError(DedupStatsError):
    """Raised when a requested item is missing from an image."""

    pass


class LayerNotFoundError(NotFoundError):
    """Raised when no manifest in an image index carries the requested name."""

    pass


class BlobStoreError(DedupStatsError):
    """Raised when a blob directory or blob file cannot be read."""

    pass


class ParseError(DedupStatsError):
    """Raised when a document does not decode to its expected shape."""

    pass


class IndexParseError(ParseError):
    """Raised when an OCI image index cannot be parsed."""

    pass


class ManifestParseError(ParseError):
    """Raised when a filesystem-image manifest blob cannot be decoded."""

    pass


class ConsistencyError(DedupStatsError):
    """Raised when the same digest is observed with two different sizes."""

    pass


class ConfigError(DedupStatsError):
    """Raised when the analysis configuration is invalid."""

    pass


class ExternalToolError(DedupStatsError):
    """Raised when an external tool (skopeo, umoci, puzzlefs) fails."""

    pass
