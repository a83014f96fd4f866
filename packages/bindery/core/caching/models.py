"""Models for the cache system.

Provides cache key and metadata models.
"""

from pydantic import BaseModel, Field


class CacheKey(BaseModel):
    """
    Stable identifier for a cache entry.

    Uniquely identifies a cached computation based on:
    - Step identity (id + version)
    - Input fingerprint (SHA256 of canonicalized inputs)
    """

    step_id: str = Field(description="Stable step identifier (e.g., 'primitives.scan')")
    step_version: str = Field(description="Step version string (bump on logic/schema changes)")
    input_fingerprint: str = Field(description="SHA256 hex digest of canonicalized inputs")

    def __str__(self) -> str:
        return f"{self.step_id}:{self.step_version}:{self.input_fingerprint[:12]}"


class CacheMeta(BaseModel):
    """
    Metadata committed after artifact write (commit marker).

    Presence of meta indicates a complete, valid cache entry.
    """

    step_id: str
    step_version: str
    input_fingerprint: str
    created_at: float = Field(description="Unix timestamp (seconds)")
    artifact_model: str = Field(description="Fully-qualified artifact model class name")
    compute_ms: float | None = Field(
        default=None, description="Computation duration in milliseconds"
    )
    artifact_bytes: int | None = Field(default=None, description="Artifact JSON size in bytes")
    ttl_seconds: float | None = None

    def matches(self, key: CacheKey) -> bool:
        return (
            self.step_id == key.step_id
            and self.step_version == key.step_version
            and self.input_fingerprint == key.input_fingerprint
        )

    def expired(self, now: float, ttl_seconds: float | None) -> bool:
        ttl = ttl_seconds if ttl_seconds is not None else self.ttl_seconds
        return ttl is not None and now > self.created_at + ttl
