"""OpenTelemetry spans around discovery operations.

Without ``init_tracing`` spans go to whatever provider the host application
installed globally (a no-op one by default).
"""

from __future__ import annotations

from collections.abc import Generator, Iterable, Mapping
from contextlib import contextmanager
import logging

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import SpanProcessor, TracerProvider
from opentelemetry.trace import Span, SpanKind, Tracer

from content_discovery.observability.context import update_span_id


logger = logging.getLogger(__name__)

TRACER_NAME = "content_discovery"

_tracer_holder: dict[str, Tracer | None] = {"tracer": None}


def init_tracing(
    service_name: str = "content-discovery",
    *,
    span_processors: Iterable[SpanProcessor] = (),
    resource_attributes: Mapping[str, str] | None = None,
) -> TracerProvider:
    """Install an SDK tracer provider as the global one.

    Exporters are attached by passing their span processors; none are
    configured by default.
    """
    provider = TracerProvider(resource=Resource.create({"service.name": service_name, **(resource_attributes or {})}))
    for processor in span_processors:
        provider.add_span_processor(processor)
    trace.set_tracer_provider(provider)
    _tracer_holder["tracer"] = provider.get_tracer(TRACER_NAME)
    logger.info("Tracing initialized for %s", service_name)
    return provider


def get_tracer() -> Tracer:
    tracer = _tracer_holder["tracer"]
    if tracer is None:
        tracer = _tracer_holder["tracer"] = trace.get_tracer(TRACER_NAME)
    return tracer


@contextmanager
def create_span(
    name: str,
    attributes: Mapping[str, str | int | float | bool] | None = None,
    kind: SpanKind = SpanKind.INTERNAL,
) -> Generator[Span, None, None]:
    """Open a span as the current one.

    An exception escaping the block is recorded on the span, which is marked
    as an error. Log records emitted inside the block carry the span's id.
    """
    with get_tracer().start_as_current_span(name, kind=kind, attributes=dict(attributes or {})) as span:
        span_context = span.get_span_context()
        if span_context.is_valid:
            update_span_id(format(span_context.span_id, "016x"))
        yield span
