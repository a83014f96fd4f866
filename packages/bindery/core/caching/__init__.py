"""Caching for Bindery.

Async cache interface used for learned property mappings, document
primitive scans and LLM call deduplication:
- Type-safe cache keys (step_id + version + input fingerprint)
- Pydantic model validation on load
- Atomic entry replacement
- Miss-on-error semantics
"""

from bindery.core.caching.backends import FSCache, MemoryCache, NullCache
from bindery.core.caching.fingerprint import compute_fingerprint
from bindery.core.caching.models import CacheKey, CacheMeta
from bindery.core.caching.protocols import Cache

__all__ = [
    # Core
    "Cache",
    "CacheKey",
    "CacheMeta",
    # Backends
    "FSCache",
    "MemoryCache",
    "NullCache",
    # Utils
    "compute_fingerprint",
]
