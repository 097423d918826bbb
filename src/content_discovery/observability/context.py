"""Per-call trace identifiers shared by the log formatter and the tracer.

The context is a plain dict with ``trace_id``, ``span_id`` and, inside a
discovery call, ``operation``.
"""

from __future__ import annotations

from collections.abc import Generator
from contextlib import contextmanager
from contextvars import ContextVar
from uuid import uuid4


trace_context: ContextVar[dict | None] = ContextVar("trace_context", default=None)


def _fresh_ids() -> dict:
    trace_id = uuid4().hex
    return {"trace_id": trace_id, "span_id": trace_id[:16]}


def get_trace_context() -> dict:
    """Return the current context, creating ids on first use."""
    ctx = trace_context.get()
    if not ctx or not ctx.get("trace_id"):
        ctx = _fresh_ids()
        trace_context.set(ctx)
    return ctx


def set_trace_context(trace_id: str, span_id: str, **extra: object) -> None:
    trace_context.set({"trace_id": trace_id, "span_id": span_id, **extra})


def update_span_id(span_id: str) -> None:
    """Point log records at a new span, keeping the trace id and any extras."""
    trace_context.set({**(trace_context.get() or {}), "span_id": span_id})


@contextmanager
def operation_scope(operation: str) -> Generator[dict, None, None]:
    """Tag log records with ``operation`` until the block exits.

    The previous context, span id included, is restored afterwards.
    """
    token = trace_context.set({**get_trace_context(), "operation": operation})
    try:
        yield trace_context.get()
    finally:
        trace_context.reset(token)
