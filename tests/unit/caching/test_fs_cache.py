"""Tests for FSCache (async).

Tests the filesystem-backed cache implementation.
"""

from unittest.mock import MagicMock

from pydantic import BaseModel
import pytest

from bindery.core.caching import CacheKey, FSCache
from bindery.core.caching.backends import fs as fs_backend


class SampleArtifact(BaseModel):
    """Sample artifact model for testing."""

    value: str
    schema_version: int = 1


@pytest.fixture
async def cache(tmp_path):
    """Provide initialized FSCache instance."""
    c = FSCache(tmp_path / ".cache")
    await c.initialize()
    return c


@pytest.fixture
def test_key():
    """Provide test cache key."""
    return CacheKey(
        step_id="test.step",
        step_version="1",
        input_fingerprint="abc123" * 10 + "abcd",
    )


class TestInitialization:
    """Tests for cache initialization."""

    async def test_initialize_creates_root(self, tmp_path):
        """Test initialize creates cache root directory."""
        cache = FSCache(tmp_path / ".cache")
        await cache.initialize()

        assert (tmp_path / ".cache").is_dir()


class TestExists:
    """Tests for cache entry existence checks."""

    async def test_exists_returns_false_for_missing_entry(self, cache: FSCache, test_key: CacheKey):
        """Test exists returns False when entry doesn't exist."""
        assert not await cache.exists(test_key)

    async def test_exists_returns_true_for_complete_entry(self, cache: FSCache, test_key: CacheKey):
        """Test exists returns True when both artifact and meta exist."""
        await cache.store(test_key, SampleArtifact(value="test"))

        assert await cache.exists(test_key)

    async def test_exists_returns_false_for_artifact_without_meta(
        self, cache: FSCache, test_key: CacheKey
    ):
        """Test exists returns False when artifact exists but meta missing."""
        cache._entry_dir(test_key).mkdir(parents=True)
        cache._artifact_path(test_key).write_text('{"value": "test", "schema_version": 1}')

        assert not await cache.exists(test_key)


class TestLoad:
    """Tests for loading cached artifacts."""

    async def test_load_returns_none_for_missing_entry(self, cache: FSCache, test_key: CacheKey):
        """Test load returns None when entry doesn't exist."""
        assert await cache.load(test_key, SampleArtifact) is None

    async def test_load_returns_artifact_on_hit(self, cache: FSCache, test_key: CacheKey):
        """Test load returns cached artifact on cache hit."""
        await cache.store(test_key, SampleArtifact(value="hit"))

        result = await cache.load(test_key, SampleArtifact)

        assert result == SampleArtifact(value="hit")

    async def test_corrupted_artifact_is_a_miss(self, cache: FSCache, test_key: CacheKey):
        """Test unreadable artifact JSON is treated as a miss."""
        await cache.store(test_key, SampleArtifact(value="ok"))
        cache._artifact_path(test_key).write_text("{not json")

        assert await cache.load(test_key, SampleArtifact) is None

    async def test_schema_mismatch_is_a_miss(self, cache: FSCache, test_key: CacheKey):
        """Test artifact failing model validation is treated as a miss."""
        await cache.store(test_key, SampleArtifact(value="ok"))
        cache._artifact_path(test_key).write_text('{"other": 1}')

        assert await cache.load(test_key, SampleArtifact) is None

    async def test_corrupted_meta_is_a_miss(self, cache: FSCache, test_key: CacheKey):
        """Test unreadable meta.json is treated as a miss."""
        await cache.store(test_key, SampleArtifact(value="ok"))
        cache._meta_path(test_key).write_text("garbage")

        assert await cache.load(test_key, SampleArtifact) is None

    async def test_expired_entry_is_a_miss(self, cache: FSCache, test_key: CacheKey):
        """Test entries older than the TTL are not returned."""
        await cache.store(test_key, SampleArtifact(value="old"), ttl_seconds=-1)

        assert await cache.load(test_key, SampleArtifact) is None


class TestStoreAndInvalidate:
    """Tests for writes and removal."""

    async def test_store_replaces_entry(self, cache: FSCache, test_key: CacheKey):
        await cache.store(test_key, SampleArtifact(value="one"))
        await cache.store(test_key, SampleArtifact(value="two"))

        result = await cache.load(test_key, SampleArtifact)
        assert result is not None
        assert result.value == "two"

    async def test_no_temp_files_left(self, cache: FSCache, test_key: CacheKey):
        await cache.store(test_key, SampleArtifact(value="x"))

        names = sorted(p.name for p in cache._entry_dir(test_key).iterdir())
        assert names == ["artifact.json", "meta.json"]

    async def test_invalidate_removes_entry(self, cache: FSCache, test_key: CacheKey):
        await cache.store(test_key, SampleArtifact(value="x"))
        await cache.invalidate(test_key)

        assert not await cache.exists(test_key)
        assert not cache._entry_dir(test_key).exists()

    async def test_invalidate_removes_stray_temp_files(self, cache: FSCache, test_key: CacheKey):
        await cache.store(test_key, SampleArtifact(value="x"))
        (cache._entry_dir(test_key) / ".artifact.json.leftover.tmp").write_text("partial")

        await cache.invalidate(test_key)

        assert not cache._entry_dir(test_key).exists()

    async def test_invalidate_missing_entry_is_noop(self, cache: FSCache, test_key: CacheKey):
        await cache.invalidate(test_key)

        assert not cache._entry_dir(test_key).exists()

    async def test_failed_replace_cleans_temp_file(
        self, cache: FSCache, test_key: CacheKey, monkeypatch: pytest.MonkeyPatch
    ):
        """Test a failed swap leaves neither the temp file nor a committed entry."""
        failing_os = MagicMock()
        failing_os.replace.side_effect = OSError("disk full")
        monkeypatch.setattr(fs_backend, "os", failing_os)

        with pytest.raises(OSError, match="disk full"):
            await cache.store(test_key, SampleArtifact(value="x"))

        assert list(cache._entry_dir(test_key).iterdir()) == []
        assert not await cache.exists(test_key)
