"""Test configuration and fixtures."""

import pytest

from oci_dedup_stats.models import Layout
from oci_dedup_stats.oci.layout import Workspace
from tests.helpers import write_chunked_image, write_plain_image, write_sized_blobs


@pytest.fixture
def workspace(tmp_path):
    """Empty working directory for snapshots."""
    root = tmp_path / "work"
    root.mkdir()
    return Workspace(root)


@pytest.fixture
def two_tag_workspace(workspace):
    """Two snapshots whose chunked blobs match the a/b/c example.

    t1 holds {a: 100, b: 200}, t2 holds {a: 100, c: 300} in the chunked
    layout; the plain layout holds one unique layer per snapshot.
    """
    write_sized_blobs(workspace.blob_dir("t1", Layout.CHUNKED), {"a": 100, "b": 200})
    write_sized_blobs(workspace.blob_dir("t2", Layout.CHUNKED), {"a": 100, "c": 300})
    write_sized_blobs(workspace.blob_dir("t1", Layout.PLAIN), {"l1": 1000})
    write_sized_blobs(workspace.blob_dir("t2", Layout.PLAIN), {"l2": 1000})
    return workspace


@pytest.fixture
def built_workspace(workspace):
    """Two fully built snapshots sharing one layer and some metadata."""
    shared_layer = b"shared base layer" * 64
    write_plain_image(workspace, "10.25", [shared_layer, b"app v1" * 32])
    write_plain_image(workspace, "10.26", [shared_layer, b"app v2" * 32])

    write_chunked_image(
        workspace,
        "10.25",
        metadata_blobs=[b"inodes v1" * 100, b"shared dirents" * 10],
        chunks=[b"chunk common" * 50, b"chunk one" * 20],
    )
    write_chunked_image(
        workspace,
        "10.26",
        metadata_blobs=[b"inodes v2" * 100, b"shared dirents" * 10],
        chunks=[b"chunk common" * 50, b"chunk two" * 30],
    )
    return workspace

