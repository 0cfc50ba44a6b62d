"""Prometheus metrics for tool dispatch and search sessions."""

from prometheus_client import Counter, Histogram

# Tool dispatch metrics
tool_latency_ms = Histogram(
    "tool_latency_ms",
    "Tool dispatch latency in milliseconds",
    ["tool", "outcome"],
    buckets=[1, 5, 10, 50, 100, 500, 1000, 4000],
)

tool_errors_total = Counter(
    "tool_errors_total",
    "Total failed tool dispatches",
    ["tool", "reason"],
)

# Search session metrics
search_requests_total = Counter(
    "search_requests_total",
    "Total search requests by outcome",
    ["outcome"],
)

search_rounds = Histogram(
    "search_rounds",
    "Model round trips per search session",
    buckets=[1, 2, 3, 4, 5, 8, 13],
)

search_scope_mismatch_total = Counter(
    "search_scope_mismatch_total",
    "Decoded users dropped for falling outside the declared organization",
)


class PrometheusToolMetrics:
    """Prometheus-based tool metrics implementation."""

    def record_latency(self, tool: str, outcome: str, latency_ms: float) -> None:
        """Record tool dispatch latency."""
        tool_latency_ms.labels(tool=tool, outcome=outcome).observe(latency_ms)

    def inc_error(self, tool: str, reason: str) -> None:
        """Increment error counter."""
        tool_errors_total.labels(tool=tool, reason=reason).inc()
