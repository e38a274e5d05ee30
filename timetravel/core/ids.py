"""
Stable segment identifiers.

Segments carry no identifier of their own and projected segments are fresh
objects, so identity is derived from position in the document's content.
"""

import hashlib
from typing import Optional


def stable_id(*parts: str) -> str:
    """
    Generate stable ID derived from inputs (no randomness).

    Example:
        stable_id("README.md", "3") -> "5c1e..."
    """
    raw = "|".join(parts).encode("utf-8")
    return hashlib.sha256(raw).hexdigest()


def segment_key(index: int, namespace: Optional[str] = None) -> str:
    """
    Key for the segment at ``index`` in the original content sequence.

    Without a namespace the key is ``seg-<index>``. With one (typically the
    document path) the key is a short stable hash, so keys from different
    documents never collide.
    """
    if index < 0:
        raise ValueError(f"segment index must be non-negative, got {index}")
    if namespace is None:
        return f"seg-{index}"
    return f"seg-{stable_id(namespace, str(index))[:16]}"
