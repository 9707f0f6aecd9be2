"""Digest parsing utilities."""

import re

from ..exceptions import ParseError

# Regex pattern for valid digest format (algorithm:hex)
DIGEST_PATTERN = re.compile(r"^([a-z0-9]+):([a-f0-9]+)$")

DEFAULT_ALGORITHM = "sha256"


def split_digest(digest: str, algorithm: str = DEFAULT_ALGORITHM) -> str:
    """Return the hex part of an ``algorithm:hex`` digest.

    The algorithm prefix is checked against the expected one instead of
    being stripped blindly, so blobs hashed with another algorithm are
    never looked up under the wrong directory.

    Args:
        digest: Digest string (e.g. "sha256:c0ffee")
        algorithm: Algorithm the digest is expected to use

    Returns:
        Lowercase hex portion of the digest

    Raises:
        ParseError: If the digest is malformed or uses another algorithm
    """
    if not isinstance(digest, str):
        raise ParseError(f"Digest must be a string, got {type(digest).__name__}")

    match = DIGEST_PATTERN.fullmatch(digest)
    if not match:
        raise ParseError(f"Invalid digest format: {digest!r}")

    found, hex_part = match.groups()
    if found != algorithm:
        raise ParseError(
            f"Unexpected digest algorithm {found!r} in {digest!r} "
            f"(expected {algorithm!r})"
        )
    return hex_part
