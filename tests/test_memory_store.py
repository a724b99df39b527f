"""Tests for the process-local cache, generation queue and hourly quota."""

from unittest.mock import patch

from ideavault.core.memory_store import (
    GenerationQueue,
    HourlyQuota,
    TTLCache,
    get_report_cache,
    reset_memory_stores,
)


class TestTTLCache:
    def test_serves_entry_inside_ttl(self):
        cache = TTLCache(default_ttl=60)
        with patch("ideavault.core.memory_store.monotonic", return_value=100.0):
            cache.put("k", {"report": 1})
        with patch("ideavault.core.memory_store.monotonic", return_value=159.0):
            assert cache.get("k") == {"report": 1}

    def test_expired_entry_is_ignored_but_kept(self):
        cache = TTLCache(default_ttl=60)
        with patch("ideavault.core.memory_store.monotonic", return_value=100.0):
            cache.put("k", "v")
        with patch("ideavault.core.memory_store.monotonic", return_value=160.0):
            assert cache.get("k") is None
            assert "k" not in cache
        assert len(cache) == 1

    def test_per_entry_ttl_overrides_default(self):
        cache = TTLCache(default_ttl=60)
        with patch("ideavault.core.memory_store.monotonic", return_value=0.0):
            cache.put("k", "v", ttl=5)
        with patch("ideavault.core.memory_store.monotonic", return_value=10.0):
            assert cache.get("k") is None

    def test_missing_key(self):
        assert TTLCache(default_ttl=60).get("nope") is None


class TestGenerationQueue:
    def test_second_acquire_is_rejected_until_release(self):
        queue = GenerationQueue()

        assert queue.try_acquire("user:1", "abc") is True
        assert queue.try_acquire("user:1", "abc") is False
        assert queue.is_active("user:1")
        assert queue.get("user:1").checksum == "abc"

        queue.release("user:1")

        assert not queue.is_active("user:1")
        assert queue.try_acquire("user:1", "abc") is True

    def test_keys_are_independent(self):
        queue = GenerationQueue()
        assert queue.try_acquire("user:1", "a")
        assert queue.try_acquire("user:2", "a")

    def test_release_unknown_key_is_noop(self):
        GenerationQueue().release("missing")


class TestHourlyQuota:
    def test_exceeded_at_limit(self):
        quota = HourlyQuota({"reports": 2})

        assert not quota.is_exceeded("reports")
        quota.record("reports")
        quota.record("reports")
        assert quota.is_exceeded("reports")

    def test_unknown_kind_is_unlimited(self):
        quota = HourlyQuota({})
        quota.record("embeddings")
        assert not quota.is_exceeded("embeddings")

    def test_counters_reset_after_an_hour(self):
        with patch("ideavault.core.memory_store.monotonic", return_value=0.0):
            quota = HourlyQuota({"reports": 1})
            quota.record("reports")
            assert quota.is_exceeded("reports")
        with patch("ideavault.core.memory_store.monotonic", return_value=3601.0):
            assert not quota.is_exceeded("reports")


def test_reset_memory_stores_drops_singletons():
    cache = get_report_cache()
    cache.put("k", "v")

    reset_memory_stores()

    assert get_report_cache() is not cache
    assert get_report_cache().get("k") is None
