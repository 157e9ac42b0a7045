# statichash/digest.py
"""
Short content digests for public asset names.

The token is the first DIGEST_SIZE bytes of a cryptographic hash, encoded
with the URL-safe base64 alphabet and no padding. Six bytes give an
eight character token that can go straight into a URL path segment.
"""

import base64
import hashlib
from pathlib import Path

DIGEST_SIZE = 6
DEFAULT_ALGORITHM = "sha3_256"


def _encode(raw: bytes, size: int) -> str:
    return base64.urlsafe_b64encode(raw[:size]).rstrip(b"=").decode("ascii")


def check_algorithm(algorithm: str, size: int = DIGEST_SIZE) -> str:
    """
    Ensure a hashlib algorithm can produce a token of the given size.

    Variable-length algorithms (shake_128, shake_256) report a digest_size
    of 0 and are rejected along with unknown names.

    Raises:
        ValueError: if the algorithm is unknown or its digest is too short
    """
    try:
        hasher = hashlib.new(algorithm)
    except (TypeError, ValueError):
        raise ValueError(f"Unsupported hash algorithm: {algorithm!r}") from None
    if hasher.digest_size < size:
        raise ValueError(
            f"Hash algorithm {algorithm!r} gives {hasher.digest_size} bytes, need at least {size}"
        )
    return algorithm


def digest(content: bytes, algorithm: str = DEFAULT_ALGORITHM, size: int = DIGEST_SIZE) -> str:
    """
    Compute the short token for a block of content.

    Args:
        content: Raw asset bytes (may be empty)
        algorithm: Any hashlib algorithm name (sha3_256, blake2b, sha256, ...)
        size: Number of hash bytes kept before encoding

    Returns:
        URL-safe, unpadded base64 token
    """
    hasher = hashlib.new(algorithm)
    hasher.update(content)
    return _encode(hasher.digest(), size)


def file_digest(path: Path | str, algorithm: str = DEFAULT_ALGORITHM, size: int = DIGEST_SIZE) -> str:
    """Compute the short token of a file without holding it in memory."""
    hasher = hashlib.new(algorithm)
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(65536), b""):
            hasher.update(chunk)
    return _encode(hasher.digest(), size)
