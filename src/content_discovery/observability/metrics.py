"""Prometheus metrics for discovery operations."""

from __future__ import annotations

from contextlib import contextmanager
import time
from typing import TYPE_CHECKING

from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest


if TYPE_CHECKING:
    from collections.abc import Generator


QUERY_LATENCY = Histogram(
    "content_discovery_query_latency_seconds",
    "Discovery operation latency in seconds",
    ["operation"],
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0),
)

QUERY_COUNT = Counter(
    "content_discovery_queries_total",
    "Total discovery operations",
    ["operation", "status"],
)

ERROR_COUNT = Counter(
    "content_discovery_errors_total",
    "Total discovery errors",
    ["operation", "error_type"],
)

RESULT_COUNT = Histogram(
    "content_discovery_result_total",
    "Matching documents per discovery operation",
    ["operation"],
    buckets=(0, 1, 5, 10, 25, 50, 100, 250, 1000),
)


@contextmanager
def track_latency(histogram: Histogram, **labels: str) -> Generator[None, None, None]:
    """Context manager to track operation latency."""
    start = time.perf_counter()
    try:
        yield
    finally:
        histogram.labels(**labels).observe(time.perf_counter() - start)


def get_metrics() -> bytes:
    """Generate Prometheus metrics output."""
    return generate_latest()


def get_metrics_content_type() -> str:
    """Get content type for a metrics endpoint."""
    return CONTENT_TYPE_LATEST
