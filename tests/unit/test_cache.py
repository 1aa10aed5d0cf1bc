"""Tests for external lookup caches."""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest

from backend.app.cache import (
    RedisTTLCache,
    TTLCache,
    build_external_cache,
    cached_fetch,
    make_key,
)
from backend.app.config import Settings


class FakeClock:
    """Settable clock for TTL tests."""

    def __init__(self) -> None:
        self.now = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: int) -> None:
        self.now += timedelta(seconds=seconds)


@pytest.mark.asyncio
async def test_ttl_cache_returns_fresh_value() -> None:
    cache = TTLCache(clock=FakeClock())

    await cache.set("k", {"a": 1}, ttl_seconds=60)

    assert await cache.get("k") == {"a": 1}


@pytest.mark.asyncio
async def test_ttl_cache_expires_and_evicts() -> None:
    clock = FakeClock()
    cache = TTLCache(clock=clock)
    await cache.set("k", "v", ttl_seconds=60)

    clock.advance(60)

    assert await cache.get("k") is None
    assert len(cache) == 0


@pytest.mark.asyncio
async def test_ttl_caches_are_independent() -> None:
    """Two handles never share entries."""
    first = TTLCache()
    second = TTLCache()

    await first.set("k", "v", ttl_seconds=60)

    assert await second.get("k") is None


@pytest.mark.asyncio
async def test_set_sweeps_entries_that_expired_without_being_read() -> None:
    clock = FakeClock()
    cache = TTLCache(clock=clock, max_entries=5000)
    for i in range(1000):
        await cache.set(f"geo:{i}", {"i": i}, ttl_seconds=60)

    clock.advance(86400)
    await cache.set("geo:new", {"i": -1}, ttl_seconds=60)

    assert len(cache) == 1
    assert await cache.get("geo:new") == {"i": -1}


@pytest.mark.asyncio
async def test_oldest_write_is_evicted_past_max_entries() -> None:
    cache = TTLCache(clock=FakeClock(), max_entries=2)
    await cache.set("a", 1, ttl_seconds=60)
    await cache.set("b", 2, ttl_seconds=60)
    # Rewriting "a" makes "b" the oldest write
    await cache.set("a", 10, ttl_seconds=60)

    await cache.set("c", 3, ttl_seconds=60)

    assert len(cache) == 2
    assert await cache.get("b") is None
    assert await cache.get("a") == 10
    assert await cache.get("c") == 3


def test_max_entries_must_be_positive() -> None:
    with pytest.raises(ValueError, match="max_entries"):
        TTLCache(max_entries=0)


def test_make_key_ignores_parameter_order() -> None:
    assert make_key("geo", city="Paris", country="France") == make_key(
        "geo", country="France", city="Paris"
    )
    assert make_key("geo", city="Paris") != make_key("geo", city="Rome")
    assert make_key("geo", city="Paris").startswith("geo:")


@pytest.mark.asyncio
async def test_cached_fetch_fetches_once_then_hits() -> None:
    cache = TTLCache()
    fetch = AsyncMock(return_value={"name": "France"})
    metrics = MagicMock()

    first, first_hit = await cached_fetch(
        cache, source="countries", key="c", ttl_seconds=60, fetch=fetch, metrics=metrics
    )
    second, second_hit = await cached_fetch(
        cache, source="countries", key="c", ttl_seconds=60, fetch=fetch, metrics=metrics
    )

    assert first == second == {"name": "France"}
    assert (first_hit, second_hit) == (False, True)
    fetch.assert_awaited_once()
    metrics.inc_cache_hit.assert_called_once_with("countries")
    assert metrics.record_latency.call_args.args[:2] == ("countries", "success")


@pytest.mark.asyncio
async def test_cached_fetch_does_not_cache_missing_values() -> None:
    cache = TTLCache()
    fetch = AsyncMock(return_value=None)

    await cached_fetch(cache, source="countries", key="c", ttl_seconds=60, fetch=fetch)
    value, hit = await cached_fetch(cache, source="countries", key="c", ttl_seconds=60, fetch=fetch)

    assert value is None
    assert hit is False
    assert fetch.await_count == 2


@pytest.mark.asyncio
async def test_cached_fetch_propagates_errors() -> None:
    cache = TTLCache()
    fetch = AsyncMock(side_effect=RuntimeError("boom"))
    metrics = MagicMock()

    with pytest.raises(RuntimeError):
        await cached_fetch(
            cache, source="weather", key="w", ttl_seconds=60, fetch=fetch, metrics=metrics
        )

    assert metrics.record_latency.call_args.args[:2] == ("weather", "error")
    assert await cache.get("w") is None


@pytest.mark.asyncio
async def test_redis_cache_serializes_json_with_ttl() -> None:
    client = MagicMock()
    client.set = AsyncMock()
    client.get = AsyncMock(return_value='{"a": 1}')
    cache = RedisTTLCache(client, prefix="t:")

    await cache.set("k", {"a": 1}, ttl_seconds=30)
    value = await cache.get("k")

    client.set.assert_awaited_once_with("t:k", '{"a": 1}', ex=30)
    client.get.assert_awaited_once_with("t:k")
    assert value == {"a": 1}


@pytest.mark.asyncio
async def test_redis_cache_miss() -> None:
    client = MagicMock()
    client.get = AsyncMock(return_value=None)

    assert await RedisTTLCache(client).get("missing") is None


def test_build_external_cache_defaults_to_memory() -> None:
    cache = build_external_cache(Settings(redis_url=None, external_cache_max_entries=10))

    assert isinstance(cache, TTLCache)
    assert cache.backend_name == "memory"


def test_build_external_cache_uses_redis_when_configured() -> None:
    cache = build_external_cache(Settings(redis_url="redis://localhost:6379/0"))

    assert isinstance(cache, RedisTTLCache)
    assert cache.backend_name == "redis"
