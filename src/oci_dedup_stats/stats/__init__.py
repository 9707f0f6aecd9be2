"""Deduplication statistics and reporting."""

from .aggregator import (
    OccurrenceTable,
    build_occurrence_tables,
    compute_layout_stats,
    compute_metadata_size,
    generate_report,
)
from .report import format_report

__all__ = [
    "OccurrenceTable",
    "build_occurrence_tables",
    "compute_layout_stats",
    "compute_metadata_size",
    "format_report",
    "generate_report",
]
