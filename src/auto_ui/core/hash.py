"""Content fingerprints for change detection.

The hot-reload watcher uses these to ignore saves that leave a source file
byte-for-byte unchanged.
"""

from enum import Enum
import hashlib

import xxhash


class Algorithm(str, Enum):
    """Supported hash algorithms."""

    XXHASH64 = "xxhash64"  # Fast, non-cryptographic
    SHA256 = "sha256"


def hash_bytes(data: bytes, algorithm: Algorithm = Algorithm.XXHASH64) -> str:
    """
    Hash bytes to hex digest.

    Args:
        data: Bytes to hash
        algorithm: Hash algorithm

    Returns:
        Hex digest string
    """
    if algorithm == Algorithm.XXHASH64:
        return xxhash.xxh64(data).hexdigest()
    if algorithm == Algorithm.SHA256:
        return hashlib.sha256(data).hexdigest()
    raise ValueError(f"Unknown algorithm: {algorithm}")


def fingerprint(source: str, algorithm: Algorithm = Algorithm.XXHASH64) -> str:
    """
    Fingerprint source text.

    Examples:
        >>> fingerprint("type A {}") == fingerprint("type A {}")
        True
    """
    return hash_bytes(source.encode("utf-8"), algorithm)


__all__ = ["Algorithm", "hash_bytes", "fingerprint"]
