"""Analysis configuration."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .exceptions import ConfigError
from .models import ChunkBounds
from .oci.layout import Workspace
from .stats.aggregator import DEFAULT_LAYER_NAME

DEFAULT_TAGS = ("10.25", "10.26", "10.27", "10.28", "10.29", "10.30")
DEFAULT_IMAGE_NAME = "barehost"


def default_puzzlefs_binary() -> str:
    return os.getenv("PUZZLEFS_BINARY", "puzzlefs")


@dataclass
class AnalysisConfig:
    """Snapshots to analyze and where the external tools find them."""

    tags: list[str] = field(default_factory=lambda: list(DEFAULT_TAGS))
    work_dir: Path = field(default_factory=Path.cwd)
    layer_name: str = DEFAULT_LAYER_NAME
    image_name: str = DEFAULT_IMAGE_NAME
    repo: Optional[str] = None
    base_dir: Optional[str] = None
    skopeo_binary: str = "skopeo"
    umoci_binary: str = "umoci"
    puzzlefs_binary: str = field(default_factory=default_puzzlefs_binary)

    def __post_init__(self) -> None:
        self.work_dir = Path(self.work_dir)
        if not self.tags:
            raise ConfigError("At least one tag is required")
        if len(set(self.tags)) != len(self.tags):
            raise ConfigError(f"Duplicate tags in {self.tags}")
        for tag in self.tags:
            if not tag or "/" in tag or tag in (".", ".."):
                raise ConfigError(f"Invalid tag: {tag!r}")

    def workspace(self) -> Workspace:
        return Workspace(self.work_dir)

    def image_reference(self, tag: str) -> str:
        """Remote reference of a snapshot, e.g. docker://repo/base/barehost:tag."""
        if not self.repo or not self.base_dir:
            raise ConfigError("Fetching images requires a repository and base dir")
        return f"docker://{self.repo}/{self.base_dir}/{self.image_name}:{tag}"


def validate_chunk_bounds(bounds: ChunkBounds) -> ChunkBounds:
    """Check FastCDC parameters the same way the image builder does.

    Raises:
        ConfigError: If a value is not positive, or a complete set violates
            ``min < avg < max`` and ``max - min > avg``
    """
    for name in ("min", "avg", "max"):
        value = getattr(bounds, name)
        if value is not None and value <= 0:
            raise ConfigError(f"Chunk size --{name} must be positive, got {value}")

    if bounds.is_complete():
        if not (bounds.min < bounds.avg < bounds.max):
            raise ConfigError(
                f"Incorrect fastcdc parameters: need min < avg < max, "
                f"got {bounds.min} {bounds.avg} {bounds.max}"
            )
        if bounds.max - bounds.min <= bounds.avg:
            raise ConfigError(
                f"Incorrect fastcdc parameters: need max - min > avg, "
                f"got {bounds.min} {bounds.avg} {bounds.max}"
            )
    return bounds
