"""Tests for the in-memory research cache."""

from __future__ import annotations

from prospect_research.cache.store import ResearchCache


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


class TestResearchCache:
    def test_hit_and_miss(self, make_result):
        cache = ResearchCache(ttl_hours=24, clock=FakeClock())
        result = make_result("Acme", 55)
        cache.set_company("Acme", result)

        assert cache.get_company("acme") == result
        assert cache.get_company("Beta") is None

    def test_entry_expires_at_ttl(self, make_result):
        clock = FakeClock()
        cache = ResearchCache(ttl_hours=2, clock=clock)
        cache.set_company("Acme", make_result("Acme"))

        clock.now += 2 * 3600 - 1
        assert cache.get_company("Acme") is not None

        clock.now += 1
        assert cache.get_company("Acme") is None
        assert len(cache) == 0

    def test_clear(self, make_result):
        cache = ResearchCache(clock=FakeClock())
        cache.set_company("Acme", make_result("Acme"))
        cache.set_company("Beta", make_result("Beta"))

        cache.clear_company(" ACME ")
        assert cache.get_company("Acme") is None
        assert len(cache) == 1

        cache.clear_all()
        assert len(cache) == 0

    def test_stats_split_live_and_expired(self, make_result):
        clock = FakeClock()
        cache = ResearchCache(ttl_hours=1, clock=clock)
        cache.set_company("Old", make_result("Old"))
        clock.now += 3600
        cache.set_company("New", make_result("New"))

        assert cache.stats() == {"companies": 1, "expired": 1, "ttl_hours": 1.0}
