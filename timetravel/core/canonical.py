"""
Canonical serialization for reconstruction results.

Two reconstructions of the same document at the same commit must serialize
to identical bytes, whether they came from the cache or a fresh projection.
"""

import hashlib
import json
from typing import Any


def canonicalize(obj: Any) -> Any:
    """
    Convert arbitrary nested dict/list to canonical form.

    Rules:
    - dict keys sorted alphabetically
    - tuples converted to lists
    - objects exposing to_dict() are converted first
    - recursive normalization
    """
    if hasattr(obj, "to_dict"):
        return canonicalize(obj.to_dict())
    if isinstance(obj, dict):
        return {k: canonicalize(obj[k]) for k in sorted(obj.keys())}
    if isinstance(obj, (list, tuple)):
        return [canonicalize(x) for x in obj]
    return obj


def canonical_json_bytes(obj: Any) -> bytes:
    """
    Deterministic JSON bytes for hashing.

    Guarantees:
    - sort_keys=True (secondary safety)
    - separators remove whitespace
    - ensure_ascii=False keeps UTF-8 stable
    - canonical preprocessing via canonicalize()
    """
    canon = canonicalize(obj)
    s = json.dumps(canon, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    return s.encode("utf-8")


def canonical_json_str(obj: Any) -> str:
    """Deterministic JSON string (for display or comparison)."""
    return canonical_json_bytes(obj).decode("utf-8")


def canonical_hash(obj: Any) -> str:
    """SHA-256 hex digest of the canonical JSON bytes."""
    return hashlib.sha256(canonical_json_bytes(obj)).hexdigest()
