"""Prometheus metrics for itinerary mutations and external lookups."""

from prometheus_client import CollectorRegistry, Counter, Histogram

# /metrics exposes only this registry, not the process collectors
registry = CollectorRegistry()

# Itinerary metrics
trip_mutations_total = Counter(
    "trip_mutations_total",
    "Total orchestrated trip mutations",
    ["operation", "outcome"],
    registry=registry,
)

schedule_rejections_total = Counter(
    "schedule_rejections_total",
    "Total mutations rejected by date range validation",
    ["operation", "error_kind"],
    registry=registry,
)

# External lookup metrics
external_latency_ms = Histogram(
    "external_latency_ms",
    "External API latency in milliseconds",
    ["source", "outcome"],
    buckets=[10, 50, 100, 200, 500, 1000, 2000, 4000, 8000],
    registry=registry,
)

external_cache_hits_total = Counter(
    "external_cache_hits_total",
    "Total external lookup cache hits",
    ["source"],
    registry=registry,
)


class PrometheusItineraryMetrics:
    """Prometheus-based itinerary metrics implementation."""

    def inc_mutation(self, operation: str, outcome: str) -> None:
        """Increment mutation counter."""
        trip_mutations_total.labels(operation=operation, outcome=outcome).inc()

    def inc_rejection(self, operation: str, error_kind: str) -> None:
        """Increment rejection counter."""
        schedule_rejections_total.labels(operation=operation, error_kind=error_kind).inc()


class PrometheusExternalMetrics:
    """Prometheus-based external lookup metrics implementation."""

    def record_latency(self, source: str, outcome: str, latency_ms: float) -> None:
        """Record external call latency."""
        external_latency_ms.labels(source=source, outcome=outcome).observe(latency_ms)

    def inc_cache_hit(self, source: str) -> None:
        """Increment cache hit counter."""
        external_cache_hits_total.labels(source=source).inc()
