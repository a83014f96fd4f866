"""Protocol for cache backends."""

from typing import Protocol, TypeVar

from pydantic import BaseModel

from .models import CacheKey

T = TypeVar("T", bound=BaseModel)


class Cache(Protocol):
    """
    Protocol for cache backends (async).

    All implementations must support:
    - Atomic replacement of an entry on store
    - Pydantic model validation on load
    - Miss-on-error semantics (corruption -> cache miss, never an exception)
    """

    async def exists(self, key: CacheKey, ttl_seconds: float | None = None) -> bool:
        """
        Check if a valid, unexpired entry exists for key.

        Args:
            key: Cache key
            ttl_seconds: Optional TTL overriding the stored one

        Returns:
            True if the entry is complete and not expired
        """
        ...

    async def load(
        self, key: CacheKey, model_cls: type[T], ttl_seconds: float | None = None
    ) -> T | None:
        """
        Load and validate a cached artifact.

        Args:
            key: Cache key
            model_cls: Pydantic model class for validation
            ttl_seconds: Optional TTL overriding the stored one

        Returns:
            Validated artifact model, or None on miss/error/expiration
        """
        ...

    async def store(
        self,
        key: CacheKey,
        artifact: BaseModel,
        compute_ms: float | None = None,
        ttl_seconds: float | None = None,
    ) -> None:
        """
        Store artifact, fully replacing any previous entry for key.

        Args:
            key: Cache key
            artifact: Pydantic model to cache
            compute_ms: Optional computation duration
            ttl_seconds: Optional TTL recorded with the entry
        """
        ...

    async def invalidate(self, key: CacheKey) -> None:
        """
        Invalidate (delete) cache entry.

        Args:
            key: Cache key
        """
        ...
