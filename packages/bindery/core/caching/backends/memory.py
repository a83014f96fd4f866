"""In-process cache backend.

Entries are kept serialized so a load always re-validates, matching the
filesystem backend's behavior.
"""

import logging
import time
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from bindery.core.caching.models import CacheKey, CacheMeta

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class MemoryCache:
    """
    Async in-memory cache.

    Each store swaps the whole ``(meta, artifact)`` entry in one assignment,
    so concurrent readers see either the old entry or the new one.
    """

    def __init__(self, ttl_seconds: float | None = None) -> None:
        self._entries: dict[str, tuple[str, str]] = {}
        self._ttl_seconds = ttl_seconds

    @staticmethod
    def _slot(key: CacheKey) -> str:
        return f"{key.step_id}/{key.input_fingerprint}"

    def __len__(self) -> int:
        return len(self._entries)

    def _meta(self, key: CacheKey) -> CacheMeta | None:
        entry = self._entries.get(self._slot(key))
        if entry is None:
            return None
        try:
            return CacheMeta.model_validate_json(entry[0])
        except (ValidationError, ValueError):
            return None

    async def exists(self, key: CacheKey, ttl_seconds: float | None = None) -> bool:
        meta = self._meta(key)
        if meta is None or not meta.matches(key):
            return False
        return not meta.expired(time.time(), ttl_seconds or self._ttl_seconds)

    async def load(
        self, key: CacheKey, model_cls: type[T], ttl_seconds: float | None = None
    ) -> T | None:
        if not await self.exists(key, ttl_seconds):
            return None

        entry = self._entries.get(self._slot(key))
        if entry is None:
            return None
        try:
            return model_cls.model_validate_json(entry[1])
        except (ValidationError, ValueError):
            logger.debug(f"Discarding unreadable cache entry {key}")
            return None

    async def store(
        self,
        key: CacheKey,
        artifact: BaseModel,
        compute_ms: float | None = None,
        ttl_seconds: float | None = None,
    ) -> None:
        artifact_json = artifact.model_dump_json()
        meta = CacheMeta(
            step_id=key.step_id,
            step_version=key.step_version,
            input_fingerprint=key.input_fingerprint,
            created_at=time.time(),
            artifact_model=f"{artifact.__class__.__module__}.{artifact.__class__.__name__}",
            compute_ms=compute_ms,
            artifact_bytes=len(artifact_json.encode("utf-8")),
            ttl_seconds=ttl_seconds or self._ttl_seconds,
        )
        self._entries[self._slot(key)] = (meta.model_dump_json(), artifact_json)

    async def invalidate(self, key: CacheKey) -> None:
        self._entries.pop(self._slot(key), None)
