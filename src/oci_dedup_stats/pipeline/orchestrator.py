"""Sequencing of the rebuild stages and the final analysis."""

import logging
import shutil
from pathlib import Path
from typing import Optional

from ..config import AnalysisConfig, validate_chunk_bounds
from ..models import ChunkBounds, DedupReport, Layout
from ..stats.aggregator import generate_report
from .tools import ExternalTools, SubprocessTools

logger = logging.getLogger(__name__)


def remove_tree(path: Path) -> None:
    """Remove a directory tree, ignoring one that does not exist."""
    if path.exists():
        logger.debug(f"Removing {path}")
        shutil.rmtree(path)


class Pipeline:
    """Rebuilds every configured snapshot and reports on the result."""

    def __init__(
        self, config: AnalysisConfig, tools: Optional[ExternalTools] = None
    ) -> None:
        self.config = config
        self.workspace = config.workspace()
        self.tools = tools if tools is not None else SubprocessTools(config)

    def clean_all(self) -> None:
        for tag in self.config.tags:
            remove_tree(self.workspace.snapshot_dir(tag))

    def clean_chunked(self) -> None:
        for tag in self.config.tags:
            remove_tree(self.workspace.image_dir(tag, Layout.CHUNKED))

    def build_chunked(self, bounds: ChunkBounds) -> None:
        for tag in self.config.tags:
            self.tools.rebuild(tag, bounds)

    def rebuild(self, bounds: ChunkBounds = ChunkBounds()) -> None:
        """Fetch, unpack and chunk every snapshot from scratch."""
        validate_chunk_bounds(bounds)
        self.clean_all()
        for tag in self.config.tags:
            self.tools.fetch(tag)
        for tag in self.config.tags:
            self.tools.unpack(tag)
        self.build_chunked(bounds)

    def rebuild_chunked(self, bounds: ChunkBounds = ChunkBounds()) -> None:
        """Rebuild only the chunked images, reusing unpacked filesystems."""
        validate_chunk_bounds(bounds)
        self.clean_chunked()
        self.build_chunked(bounds)

    def report(self) -> DedupReport:
        logger.info(f"Analyzing {len(self.config.tags)} tags in {self.workspace.root}")
        return generate_report(
            self.workspace, self.config.tags, self.config.layer_name
        )
