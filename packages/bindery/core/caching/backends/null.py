"""No-op cache for development/testing.

Always reports cache miss, discards all stores.
"""

from typing import TypeVar

from pydantic import BaseModel

from bindery.core.caching.models import CacheKey

T = TypeVar("T", bound=BaseModel)


class NullCache:
    """
    No-op async cache.

    Always reports cache miss, discards all stores.
    """

    async def exists(self, key: CacheKey, ttl_seconds: float | None = None) -> bool:
        """Always returns False."""
        return False

    async def load(
        self, key: CacheKey, model_cls: type[T], ttl_seconds: float | None = None
    ) -> T | None:
        """Always returns None."""
        return None

    async def store(
        self,
        key: CacheKey,
        artifact: BaseModel,
        compute_ms: float | None = None,
        ttl_seconds: float | None = None,
    ) -> None:
        """Discard."""

    async def invalidate(self, key: CacheKey) -> None:
        """No-op."""
