"""Tests for the per-URL page cache."""
from portal.config import get_settings
from portal.core.page_cache import PageCache, TICKETS_PATH, ticket_path


async def test_loads_once_per_query():
    cache = PageCache()
    calls = []

    async def load():
        calls.append(1)
        return ["MAS-001"]

    assert await cache.get_or_load(TICKETS_PATH, "status=Abierto", load) == ["MAS-001"]
    assert await cache.get_or_load(TICKETS_PATH, "status=Abierto", load) == ["MAS-001"]
    await cache.get_or_load(TICKETS_PATH, "", load)
    assert len(calls) == 2


def test_revalidate_drops_every_variant_of_a_path():
    cache = PageCache()
    cache.set(TICKETS_PATH, "", [])
    cache.set(TICKETS_PATH, "status=Abierto", [])
    cache.set(ticket_path("MAS-001"), "", {})
    assert cache.revalidate(TICKETS_PATH) == 2
    assert cache.get(TICKETS_PATH) is None
    assert cache.get(ticket_path("MAS-001")) == {}


def test_disabled_cache(monkeypatch):
    monkeypatch.setattr(get_settings(), "page_cache_enabled", False)
    cache = PageCache()
    cache.set(TICKETS_PATH, "", [])
    assert cache.get(TICKETS_PATH) is None


def test_expired_entries(monkeypatch):
    monkeypatch.setattr(get_settings(), "page_cache_ttl_seconds", -1)
    cache = PageCache()
    cache.set(TICKETS_PATH, "", [])
    assert cache.get(TICKETS_PATH) is None
