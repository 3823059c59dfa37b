"""Operation-scoped tracing context helpers."""

from __future__ import annotations

from contextlib import asynccontextmanager
from contextvars import ContextVar
from typing import Any

# Context variable for tracing context (isolated per asyncio task)
_trace_context: ContextVar[dict[str, Any]] = ContextVar("trace_context", default={})


def set_trace_context(
    operation_id: str | None = None,
    url: str | None = None,
    reason: str | None = None,
) -> None:
    """
    Set tracing context for the current async execution context.

    Called once at the start of each summarization operation. Every span opened
    inside the operation task picks these values up as attributes.
    """
    _trace_context.set(
        {
            "operation_id": operation_id,
            "url": url,
            "reason": reason,
        }
    )


def update_trace_context(**values: Any) -> None:
    """Merge values into the current tracing context."""
    updated = dict(_trace_context.get())
    updated.update(values)
    _trace_context.set(updated)


def get_trace_context() -> dict[str, Any]:
    """Get the current tracing context for this async execution."""
    return _trace_context.get()


def clear_trace_context() -> None:
    """Clear tracing context for the current async execution."""
    _trace_context.set({})


@asynccontextmanager
async def trace_context(
    operation_id: str | None = None,
    url: str | None = None,
    reason: str | None = None,
):
    """Context manager for tracing context lifecycle."""
    set_trace_context(
        operation_id=operation_id,
        url=url,
        reason=reason,
    )
    try:
        yield
    finally:
        clear_trace_context()
