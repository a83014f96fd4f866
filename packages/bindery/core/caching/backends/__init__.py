"""Cache backends."""

from bindery.core.caching.backends.fs import FSCache
from bindery.core.caching.backends.memory import MemoryCache
from bindery.core.caching.backends.null import NullCache

__all__ = ["FSCache", "MemoryCache", "NullCache"]
