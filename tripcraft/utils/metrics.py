"""Prometheus metrics for oracle calls."""

from prometheus_client import Counter, Histogram

oracle_latency_ms = Histogram(
    "oracle_latency_ms",
    "Oracle call latency in milliseconds",
    ["kind", "outcome"],
    buckets=[1, 10, 100, 500, 1000, 2500, 5000, 10000, 30000, 60000],
)

oracle_errors_total = Counter(
    "oracle_errors_total",
    "Total oracle call errors",
    ["kind", "reason"],
)

oracle_cache_hits_total = Counter(
    "oracle_cache_hits_total",
    "Total oracle cache hits",
    ["kind"],
)


class OracleMetrics:
    """Interface for oracle call metrics (no-op default)."""

    def record_latency(self, kind: str, outcome: str, latency_ms: float) -> None:
        """Record oracle call latency."""
        pass

    def inc_error(self, kind: str, reason: str) -> None:
        """Increment error counter."""
        pass

    def inc_cache_hit(self, kind: str) -> None:
        """Increment cache hit counter."""
        pass


class PrometheusOracleMetrics(OracleMetrics):
    """Prometheus-based oracle metrics implementation."""

    def record_latency(self, kind: str, outcome: str, latency_ms: float) -> None:
        oracle_latency_ms.labels(kind=kind, outcome=outcome).observe(latency_ms)

    def inc_error(self, kind: str, reason: str) -> None:
        oracle_errors_total.labels(kind=kind, reason=reason).inc()

    def inc_cache_hit(self, kind: str) -> None:
        oracle_cache_hits_total.labels(kind=kind).inc()
