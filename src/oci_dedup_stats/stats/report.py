"""Human-readable rendering of a dedup report."""

from ..models import DedupReport, LayoutStats, SnapshotMetadata

MB = 1024 * 1024


def to_mb(size: float) -> float:
    """Convert bytes to binary megabytes."""
    return size / MB


def format_layout(stats: LayoutStats) -> list[str]:
    return [
        f"{stats.layout.label}, {stats.snapshot_count} tags",
        f"total size: {to_mb(stats.total_size):.2f}MB",
        f"average layer size: {to_mb(stats.average_size):.2f}MB",
        f"mashed together: {to_mb(stats.mashed_size):.2f}MB",
        f"saved: {to_mb(stats.saved_size):.2f}MB",
    ]


def format_metadata(metadata: SnapshotMetadata) -> str:
    return f"{metadata.tag}: {to_mb(metadata.size):.2f}MB"


def format_report(report: DedupReport) -> list[str]:
    """Render a report as lines, one blank line after each layout block."""
    lines = []
    for stats in report.layouts:
        lines.extend(format_layout(stats))
        lines.append("")

    lines.append("metadata size:")
    lines.extend(format_metadata(metadata) for metadata in report.metadata)
    return lines
