"""Observability module for tracing, metrics, and structured logging."""

from content_discovery.observability.context import (
    get_trace_context,
    operation_scope,
    set_trace_context,
    trace_context,
)
from content_discovery.observability.logging import JsonFormatter, configure_logging
from content_discovery.observability.metrics import (
    ERROR_COUNT,
    QUERY_COUNT,
    QUERY_LATENCY,
    RESULT_COUNT,
    get_metrics,
    get_metrics_content_type,
    track_latency,
)
from content_discovery.observability.tracing import create_span, get_tracer, init_tracing


__all__ = [
    "ERROR_COUNT",
    "QUERY_COUNT",
    "QUERY_LATENCY",
    "RESULT_COUNT",
    "JsonFormatter",
    "configure_logging",
    "create_span",
    "get_metrics",
    "get_metrics_content_type",
    "get_trace_context",
    "get_tracer",
    "init_tracing",
    "operation_scope",
    "set_trace_context",
    "trace_context",
    "track_latency",
]
