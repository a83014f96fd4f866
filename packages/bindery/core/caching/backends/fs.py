"""Filesystem-backed cache.

Provides atomic commit pattern (artifact -> meta) for cache correctness.
File I/O goes through aiofiles; writes land via temp file + os.replace().
"""

from __future__ import annotations

import asyncio
import os
import re
import time
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import TypeVar

import aiofiles  # type: ignore[import-untyped]
import aiofiles.os  # type: ignore[import-untyped]
from pydantic import BaseModel, ValidationError

from bindery.core.caching.models import CacheKey, CacheMeta

T = TypeVar("T", bound=BaseModel)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")
_ENTRY_FILES = ("meta.json", "artifact.json")


def sanitize_path_component(value: str) -> str:
    """Make ``value`` safe to use as a single directory name."""
    cleaned = _UNSAFE_CHARS.sub("_", value).strip("._")
    return cleaned or "_"


async def _read_text(path: Path) -> str:
    async with aiofiles.open(path, encoding="utf-8") as f:
        content: str = await f.read()
        return content


async def _write_atomic(path: Path, text: str) -> None:
    """Write ``text`` to a temp file beside ``path`` and swap it in."""
    loop = asyncio.get_running_loop()

    def create_temp_file() -> str:
        tmp = NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        )
        tmp.close()
        return tmp.name

    tmp_path = await loop.run_in_executor(None, create_temp_file)
    try:
        async with aiofiles.open(tmp_path, mode="w", encoding="utf-8") as f:
            await f.write(text)
        await loop.run_in_executor(None, os.replace, tmp_path, str(path))
    except BaseException:
        if await aiofiles.os.path.exists(tmp_path):
            await aiofiles.os.unlink(tmp_path)
        raise


class FSCache:
    """
    Async filesystem-backed cache.

    Uses aiofiles for non-blocking I/O. The cache lazily creates its root
    on first use.
    """

    def __init__(self, root: Path | str, ttl_seconds: float | None = None) -> None:
        """
        Initialize filesystem cache.

        Args:
            root: Cache root directory
            ttl_seconds: Default TTL applied when a call gives none
        """
        self.root = Path(root)
        self._initialized = False
        self._init_lock = asyncio.Lock()
        self._ttl_seconds = ttl_seconds

    async def initialize(self) -> None:
        """
        Initialize cache (ensure root exists).

        Called automatically on first use. Safe to call multiple times.
        """
        async with self._init_lock:
            if not self._initialized:
                await aiofiles.os.makedirs(self.root, exist_ok=True)
                self._initialized = True

    def _entry_dir(self, key: CacheKey) -> Path:
        return self.root / sanitize_path_component(key.step_id) / key.input_fingerprint

    def _artifact_path(self, key: CacheKey) -> Path:
        return self._entry_dir(key) / "artifact.json"

    def _meta_path(self, key: CacheKey) -> Path:
        """Commit marker."""
        return self._entry_dir(key) / "meta.json"

    async def _read_meta(self, key: CacheKey) -> CacheMeta | None:
        try:
            meta_json = await _read_text(self._meta_path(key))
            return CacheMeta.model_validate_json(meta_json)
        except (FileNotFoundError, ValidationError, ValueError):
            return None

    async def exists(self, key: CacheKey, ttl_seconds: float | None = None) -> bool:
        """
        Check if valid cache entry exists and is not expired.

        Args:
            key: Cache key
            ttl_seconds: Optional TTL overriding the stored one

        Returns:
            True if entry exists, is valid, and not expired
        """
        await self.initialize()
        if not await aiofiles.os.path.isfile(self._artifact_path(key)):
            return False

        meta = await self._read_meta(key)
        if meta is None or not meta.matches(key):
            return False
        return not meta.expired(time.time(), ttl_seconds or self._ttl_seconds)

    async def load(
        self, key: CacheKey, model_cls: type[T], ttl_seconds: float | None = None
    ) -> T | None:
        """
        Load and validate cached artifact.

        Returns:
            Validated artifact model, or None on miss/corruption/expiration
        """
        if not await self.exists(key, ttl_seconds):
            return None

        try:
            artifact_json = await _read_text(self._artifact_path(key))
            return model_cls.model_validate_json(artifact_json)
        except (FileNotFoundError, ValidationError, ValueError):
            # Any error -> cache miss
            return None

    async def store(
        self,
        key: CacheKey,
        artifact: BaseModel,
        compute_ms: float | None = None,
        ttl_seconds: float | None = None,
    ) -> None:
        """
        Store artifact with atomic commit pattern.

        Writes artifact.json first, then meta.json (commit marker); each
        file is swapped in with a rename.
        """
        await self.initialize()
        entry_dir = self._entry_dir(key)
        await aiofiles.os.makedirs(entry_dir, exist_ok=True)

        artifact_json = artifact.model_dump_json(indent=2)
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

        await _write_atomic(self._artifact_path(key), artifact_json)
        await _write_atomic(self._meta_path(key), meta.model_dump_json(indent=2))

    async def invalidate(self, key: CacheKey) -> None:
        """Invalidate cache entry by removing its files and directory.

        meta.json goes first so a partial removal still reads as a miss.
        """
        await self.initialize()
        entry_dir = self._entry_dir(key)
        if not await aiofiles.os.path.isdir(entry_dir):
            return

        names = await aiofiles.os.listdir(entry_dir)
        ordered = [n for n in _ENTRY_FILES if n in names] + [
            n for n in names if n not in _ENTRY_FILES
        ]
        for name in ordered:
            await aiofiles.os.unlink(entry_dir / name)
        await aiofiles.os.rmdir(entry_dir)
