"""
Unit tests for the bounded token cache and the per-corpus TTL cache.
"""

import threading
from datetime import datetime, timezone

import pytest

from issue_similarity.cache.frequency_cache import FrequencyCache
from issue_similarity.cache.token_cache import BoundedCache, TokenCache
from issue_similarity.models.scoring import CorpusFrequencies


def _frequencies(key: str, total: int = 2) -> CorpusFrequencies:
    return CorpusFrequencies(
        corpus_key=key,
        document_counts={"login": 1},
        total_documents=total,
        computed_at=datetime(2025, 3, 1, tzinfo=timezone.utc),
    )


# ============================================================================
# Test Class: TokenCache
# ============================================================================


@pytest.mark.unit
class TestTokenCache:
    """Tests for insertion-order bounded cache."""

    def test_default_capacity(self):
        assert TokenCache().max_size == 1000

    def test_get_missing_returns_none(self):
        assert TokenCache().get("running") is None

    def test_put_and_get(self):
        cache = TokenCache()
        cache.put("running", "run")
        assert cache.get("running") == "run"
        assert len(cache) == 1

    def test_evicts_oldest_inserted(self):
        cache = TokenCache(max_size=2)
        cache.put("a", "1")
        cache.put("b", "2")
        cache.put("c", "3")
        assert "a" not in cache
        assert "b" in cache and "c" in cache

    def test_eviction_ignores_access_order(self):
        cache = TokenCache(max_size=2)
        cache.put("a", "1")
        cache.put("b", "2")
        cache.get("a")  # a read does not refresh its position
        cache.put("c", "3")
        assert "a" not in cache
        assert cache.get("b") == "2"

    def test_reinsert_existing_does_not_evict(self):
        cache = TokenCache(max_size=2)
        cache.put("a", "1")
        cache.put("b", "2")
        cache.put("a", "1")
        assert len(cache) == 2
        assert "a" in cache and "b" in cache

    def test_clear(self):
        cache = TokenCache()
        cache.put("a", "1")
        cache.get("a")
        cache.clear()
        assert len(cache) == 0
        assert cache.hits == 0

    def test_invalid_size(self):
        with pytest.raises(ValueError):
            BoundedCache(max_size=0)

    def test_concurrent_inserts_respect_capacity(self):
        cache = TokenCache(max_size=50)

        def worker(offset):
            for i in range(200):
                cache.put(f"w{offset}-{i}", "x")

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(cache) == 50


# ============================================================================
# Test Class: FrequencyCache
# ============================================================================


@pytest.mark.unit
class TestFrequencyCache:
    """Tests for the TTL cache keyed by corpus."""

    def test_miss_returns_none(self, fake_clock):
        cache = FrequencyCache(ttl_seconds=300, clock=fake_clock)
        assert cache.get("PROJ") is None

    def test_hit_within_ttl(self, fake_clock):
        cache = FrequencyCache(ttl_seconds=300, clock=fake_clock)
        freqs = _frequencies("PROJ")
        cache.put(freqs)
        fake_clock.advance(299)
        assert cache.get("PROJ") is freqs

    def test_expired_after_ttl(self, fake_clock):
        cache = FrequencyCache(ttl_seconds=300, clock=fake_clock)
        cache.put(_frequencies("PROJ"))
        fake_clock.advance(300)
        assert cache.get("PROJ") is None
        assert len(cache) == 0

    def test_keys_are_independent(self, fake_clock):
        cache = FrequencyCache(ttl_seconds=300, clock=fake_clock)
        cache.put(_frequencies("PROJ"))
        cache.put(_frequencies("OPS", total=5))
        assert cache.get("OPS").total_documents == 5
        assert cache.get("PROJ").total_documents == 2

    def test_clear(self, fake_clock):
        cache = FrequencyCache(ttl_seconds=300, clock=fake_clock)
        cache.put(_frequencies("PROJ"))
        cache.clear()
        assert len(cache) == 0
