"""Tests for application/services/cache.py."""

import threading

from tracepack.application.services.cache import ArtifactCache
from tracepack.domain.model.packaging_info import PackagingInfo

_INFO = PackagingInfo(location="lib", version="1.0", exact=True)
_OTHER = PackagingInfo(location="other", version="2.0", exact=False)


class TestArtifactCacheBasic:
    """Basic get/put behaviour."""

    def test_get_missing(self) -> None:
        assert ArtifactCache().get("com.acme.Widget") is None

    def test_put_then_get(self) -> None:
        cache = ArtifactCache()
        assert cache.put("com.acme.Widget", _INFO) is _INFO
        assert cache.get("com.acme.Widget") is _INFO

    def test_first_write_wins(self) -> None:
        cache = ArtifactCache()
        cache.put("com.acme.Widget", _INFO)
        stored = cache.put("com.acme.Widget", _OTHER)
        assert stored is _INFO
        assert cache.get("com.acme.Widget") is _INFO

    def test_len_contains_clear(self) -> None:
        cache = ArtifactCache()
        cache.put("a", _INFO)
        cache.put("b", _OTHER)
        assert len(cache) == 2
        assert "a" in cache
        assert "c" not in cache
        cache.clear()
        assert len(cache) == 0
        assert cache.get("a") is None


class TestArtifactCacheGetOrCompute:
    """Tests for read-through computation."""

    def test_computes_once(self) -> None:
        cache = ArtifactCache()
        calls: list[int] = []

        def compute() -> PackagingInfo:
            calls.append(1)
            return _INFO

        assert cache.get_or_compute("a", compute) is _INFO
        assert cache.get_or_compute("a", compute) is _INFO
        assert len(calls) == 1


class TestArtifactCacheThreads:
    """Concurrent writers store a single value per key."""

    def test_concurrent_puts_agree(self) -> None:
        cache = ArtifactCache()
        barrier = threading.Barrier(8)
        results: list[PackagingInfo] = []
        results_lock = threading.Lock()

        def worker(index: int) -> None:
            info = PackagingInfo(location=f"loc{index}", version="1", exact=True)
            barrier.wait()
            stored = cache.put("shared", info)
            with results_lock:
                results.append(stored)

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(results) == 8
        assert len(set(results)) == 1
        assert cache.get("shared") == results[0]
