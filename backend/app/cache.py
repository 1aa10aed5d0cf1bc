"""TTL caches for external lookups.

The cache is an explicit handle created at startup and passed to whoever
needs it; there is no module-level cache. Values must be JSON-serializable
so both backends behave the same.
"""

import hashlib
import json
import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

import redis.asyncio as aioredis

from backend.app.config import Settings
from backend.app.utils.metrics import PrometheusExternalMetrics

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass
class CacheEntry:
    """Cached lookup result with metadata."""

    value: Any
    cached_at: datetime
    ttl_seconds: int

    def is_fresh(self, now: datetime) -> bool:
        """Check if cache entry is still valid."""
        return (now - self.cached_at).total_seconds() < self.ttl_seconds


class TTLCache:
    """In-memory cache for external lookups, local to one process.

    Eviction: every ``set`` first drops all expired entries, then, if the
    cache holds more than ``max_entries``, the oldest writes go first.
    Expired entries are also dropped when read.
    """

    backend_name = "memory"

    def __init__(
        self, clock: Callable[[], datetime] = _utcnow, max_entries: int = 1024
    ) -> None:
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        # Insertion order is write order, oldest first
        self._cache: dict[str, CacheEntry] = {}
        self._clock = clock
        self._max_entries = max_entries

    async def get(self, key: str) -> Any | None:
        """Get cached value if fresh, None otherwise."""
        entry = self._cache.get(key)
        if entry and entry.is_fresh(self._clock()):
            return entry.value
        elif entry:
            # Expired - remove
            del self._cache[key]
        return None

    async def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        """Store value in cache with TTL, evicting expired and overflow entries."""
        now = self._clock()
        self._evict_expired(now)
        self._cache.pop(key, None)
        self._cache[key] = CacheEntry(value=value, cached_at=now, ttl_seconds=ttl_seconds)
        while len(self._cache) > self._max_entries:
            del self._cache[next(iter(self._cache))]

    def _evict_expired(self, now: datetime) -> None:
        expired = [key for key, entry in self._cache.items() if not entry.is_fresh(now)]
        for key in expired:
            del self._cache[key]

    async def ping(self) -> bool:
        return True

    def __len__(self) -> int:
        return len(self._cache)


class RedisTTLCache:
    """Redis-backed cache shared by every API process."""

    backend_name = "redis"

    def __init__(self, client: aioredis.Redis, prefix: str = "globetrotter:external:") -> None:
        self._redis = client
        self._prefix = prefix

    async def get(self, key: str) -> Any | None:
        raw = await self._redis.get(self._prefix + key)
        if raw is None:
            return None
        return json.loads(raw)

    async def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        await self._redis.set(self._prefix + key, json.dumps(value), ex=ttl_seconds)

    async def ping(self) -> bool:
        return bool(await self._redis.ping())


ExternalCache = TTLCache | RedisTTLCache


def make_key(source: str, **params: Any) -> str:
    """Generate deterministic cache key from lookup parameters."""
    sorted_json = json.dumps(params, sort_keys=True, default=str)
    hash_digest = hashlib.sha256(sorted_json.encode()).hexdigest()
    return f"{source}:{hash_digest}"


def build_external_cache(settings: Settings) -> ExternalCache:
    """Create the cache backend selected by settings.

    Uses Redis when ``redis_url`` is configured, otherwise an in-memory cache.
    """
    if settings.redis_url:
        client = aioredis.from_url(settings.redis_url, decode_responses=True)
        return RedisTTLCache(client)
    return TTLCache(max_entries=settings.external_cache_max_entries)


async def cached_fetch(
    cache: ExternalCache,
    *,
    source: str,
    key: str,
    ttl_seconds: int,
    fetch: Callable[[], Awaitable[Any]],
    metrics: PrometheusExternalMetrics | None = None,
) -> tuple[Any, bool]:
    """Return a cached value, or fetch and cache it.

    ``None`` results are not cached so a missing record is looked up again.

    Args:
        cache: Cache handle
        source: Lookup source name, for metrics and logs
        key: Cache key (see ``make_key``)
        ttl_seconds: Time to live for a fetched value
        fetch: Coroutine factory producing a JSON-serializable value
        metrics: Optional metrics sink

    Returns:
        (value, cache_hit)
    """
    metrics = metrics or PrometheusExternalMetrics()

    cached = await cache.get(key)
    if cached is not None:
        metrics.inc_cache_hit(source)
        return cached, True

    start = time.perf_counter()
    try:
        value = await fetch()
    except Exception:
        latency_ms = (time.perf_counter() - start) * 1000
        metrics.record_latency(source, "error", latency_ms)
        logger.warning(
            f"External lookup failed: {source}",
            extra={"structured": {"source": source, "latency_ms": latency_ms}},
        )
        raise

    latency_ms = (time.perf_counter() - start) * 1000
    metrics.record_latency(source, "success" if value is not None else "not_found", latency_ms)

    if value is not None:
        await cache.set(key, value, ttl_seconds)

    return value, False
