"""External tools that fetch, unpack and rebuild snapshots."""

import logging
import subprocess
from typing import Protocol

from ..config import AnalysisConfig
from ..exceptions import ExternalToolError
from ..models import ChunkBounds, Layout

logger = logging.getLogger(__name__)


class ExternalTools(Protocol):
    """Operations the pipeline needs from the outside world."""

    def fetch(self, tag: str) -> None:
        """Copy a snapshot's image into its plain layout directory."""
        ...

    def unpack(self, tag: str) -> None:
        """Unpack a snapshot's plain image into a root filesystem."""
        ...

    def rebuild(self, tag: str, bounds: ChunkBounds) -> None:
        """Build the chunked image of a snapshot from its root filesystem."""
        ...


def run_tool(cmd: list[str]) -> None:
    """Run an external command, raising ExternalToolError on failure."""
    logger.debug(f"Running: {' '.join(cmd)}")
    try:
        subprocess.run(cmd, check=True, capture_output=True, text=True)
    except subprocess.CalledProcessError as e:
        stderr = (e.stderr or "").strip()
        raise ExternalToolError(
            f"{cmd[0]} exited with status {e.returncode}: {stderr}"
        ) from e
    except OSError as e:
        raise ExternalToolError(f"Cannot run {cmd[0]}: {e}") from e


class SubprocessTools:
    """ExternalTools backed by skopeo, umoci and puzzlefs."""

    def __init__(self, config: AnalysisConfig) -> None:
        self.config = config
        self.workspace = config.workspace()

    def _image_ref(self, tag: str) -> str:
        image_dir = self.workspace.image_dir(tag, Layout.PLAIN)
        return f"{image_dir}:{self.config.image_name}"

    def fetch(self, tag: str) -> None:
        image_dir = self.workspace.image_dir(tag, Layout.PLAIN)
        image_dir.mkdir(parents=True, exist_ok=True)
        logger.info(f"Fetching {tag}")
        run_tool(
            [
                self.config.skopeo_binary,
                "copy",
                self.config.image_reference(tag),
                f"oci:{self._image_ref(tag)}",
            ]
        )

    def unpack(self, tag: str) -> None:
        logger.info(f"Unpacking {tag}")
        run_tool(
            [
                self.config.umoci_binary,
                "unpack",
                "--rootless",
                "--keep-dirlinks",
                "--image",
                self._image_ref(tag),
                str(self.workspace.rootfs_dir(tag)),
            ]
        )

    def rebuild(self, tag: str, bounds: ChunkBounds) -> None:
        logger.info(f"Building chunked image of {tag}")
        run_tool(
            [
                self.config.puzzlefs_binary,
                "build",
                *bounds.as_options(),
                str(self.workspace.rootfs_dir(tag) / "rootfs"),
                str(self.workspace.image_dir(tag, Layout.CHUNKED)),
                self.config.layer_name,
            ]
        )
