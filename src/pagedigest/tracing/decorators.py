"""Tracing decorators and span-kind helpers."""

from __future__ import annotations

import asyncio
from enum import Enum
from functools import wraps
import json
import time
from typing import Any, Callable

from openinference.semconv.trace import SpanAttributes
from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

from pagedigest.tracing.context import get_trace_context
from pagedigest.tracing.graph import add_graph_attributes, pop_graph_node
from pagedigest.tracing.helpers import _attach_output_to_span, _set_span_attributes
from pagedigest.tracing.runtime import _get_tracer


def track_state_change(key: str, old_value: Any, new_value: Any) -> None:
    """Track a state change by adding attributes and an event to the current span."""
    current_span = trace.get_current_span()
    if current_span and current_span.is_recording():
        current_span.set_attribute(f"state.{key}.before", str(getattr(old_value, "value", old_value)))
        current_span.set_attribute(f"state.{key}.after", str(getattr(new_value, "value", new_value)))
        current_span.add_event(
            "state_updated",
            attributes={
                "key": key,
                "old_value": str(getattr(old_value, "value", old_value)),
                "new_value": str(getattr(new_value, "value", new_value)),
            },
        )


def _record_error(span: trace.Span, exc: BaseException) -> None:
    error_msg = str(exc) if str(exc) else type(exc).__name__
    span.set_status(Status(StatusCode.ERROR, error_msg))
    span.record_exception(exc)


def trace_method(
    name: str | None = None,
    kind=None,
    capture_input: bool = True,
    capture_output: bool = True,
    graph_node_id: str | Callable | None = None,
):
    """Decorator for tracing async methods with operation context and graph metadata."""

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def wrapper(self, *args, **kwargs):
            tracer = _get_tracer(__name__)
            span_name = name or f"{self.__class__.__name__}.{func.__name__}"
            ctx = get_trace_context()

            input_value = None
            if capture_input and args and isinstance(args[0], str):
                input_value = args[0]
            elif capture_input:
                input_value = ctx.get("url")

            metadata = {
                "class": self.__class__.__name__,
                "method": func.__name__,
            }
            provider_name = getattr(self, "name", None)
            if isinstance(provider_name, str):
                metadata["component_name"] = provider_name

            with tracer.start_as_current_span(span_name) as span:
                try:
                    _set_span_attributes(
                        span,
                        {
                            SpanAttributes.OPENINFERENCE_SPAN_KIND: (
                                getattr(kind, "value", kind) if kind is not None else ""
                            ),
                            SpanAttributes.INPUT_VALUE: input_value or "",
                            "operation_id": ctx.get("operation_id", ""),
                            "operation_reason": ctx.get("reason", ""),
                            "page_url": ctx.get("url", ""),
                            "created_at": time.time(),
                            "metadata": json.dumps(metadata),
                        },
                    )

                    if graph_node_id:
                        resolved_node_id = graph_node_id(self) if callable(graph_node_id) else graph_node_id
                        add_graph_attributes(span, resolved_node_id)

                    try:
                        result = await func(self, *args, **kwargs)
                        if capture_output:
                            _attach_output_to_span(span, result)
                        span.set_status(Status(StatusCode.OK))
                        return result
                    except asyncio.CancelledError:
                        span.set_attribute("cancelled", True)
                        raise
                    except Exception as exc:
                        _record_error(span, exc)
                        raise
                finally:
                    if graph_node_id:
                        pop_graph_node()

        return wrapper

    return decorator


def trace_operation(category: str | None = None):
    """
    Decorator for tracing synchronous helpers outside the async pipeline,
    such as credential storage. Arguments and results are not recorded.
    """

    def decorator(func: Callable):
        @wraps(func)
        def wrapper(*args, **kwargs):
            tracer = _get_tracer(__name__)
            owner = args[0] if args else None
            if owner is not None and not isinstance(owner, (str, int, float)):
                owner_name = owner.__name__ if isinstance(owner, type) else owner.__class__.__name__
                span_name = f"{owner_name}.{func.__name__}"
            else:
                span_name = func.__name__

            with tracer.start_as_current_span(span_name) as span:
                if category:
                    span.set_attribute("span.category", category)
                ctx = get_trace_context()
                if ctx.get("operation_id"):
                    span.set_attribute("operation_id", ctx["operation_id"])
                try:
                    result = func(*args, **kwargs)
                except Exception as exc:
                    _record_error(span, exc)
                    raise
                span.set_status(Status(StatusCode.OK))
                return result

        return wrapper

    return decorator


class CustomSpanKinds(Enum):
    CREDENTIAL = "CREDENTIAL"
