"""
Memoized reconstruction.

Results are keyed by (document identity, target commit). A cached result is
the same value a fresh reconstruct_at() call would return.
"""

import os
import threading
from collections import OrderedDict
from typing import Optional, Tuple

from ..core.models import Document
from .runner import ReconstructionResult, reconstruct_at
from .tracing import ReconstructionTracer

DEFAULT_CACHE_SIZE = 128


def cache_size_from_env() -> int:
    """DHF_CACHE_SIZE as an int, DEFAULT_CACHE_SIZE when unset or invalid."""
    raw = os.getenv("DHF_CACHE_SIZE")
    if not raw:
        return DEFAULT_CACHE_SIZE
    try:
        return max(0, int(raw))
    except ValueError:
        return DEFAULT_CACHE_SIZE


class ReconstructionCache:
    """
    Bounded LRU cache in front of reconstruct_at().

    Entries keep a reference to their document so its id() cannot be reused
    by another object while the entry is alive. maxsize=0 disables caching.

    Usage:
        cache = ReconstructionCache(maxsize=64)
        result = cache.reconstruct_at(document, "a1b2c3d")
    """

    def __init__(self, maxsize: Optional[int] = None, tracer: Optional[ReconstructionTracer] = None) -> None:
        self.maxsize = cache_size_from_env() if maxsize is None else maxsize
        self._tracer = tracer
        self._entries: "OrderedDict[Tuple[int, str], Tuple[Document, ReconstructionResult]]" = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def reconstruct_at(self, document: Document, target_commit_id: str) -> ReconstructionResult:
        key = (id(document), target_commit_id)
        with self._lock:
            cached = self._entries.get(key)
            if cached is not None and cached[0] is document:
                self._entries.move_to_end(key)
                self.hits += 1
                return cached[1]
            self.misses += 1

        result = reconstruct_at(document, target_commit_id, tracer=self._tracer)

        if self.maxsize > 0:
            with self._lock:
                self._entries[key] = (document, result)
                self._entries.move_to_end(key)
                while len(self._entries) > self.maxsize:
                    self._entries.popitem(last=False)
        return result

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self.hits = 0
            self.misses = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
