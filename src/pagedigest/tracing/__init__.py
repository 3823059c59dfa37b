"""Public tracing API for PageDigest."""

from pagedigest.tracing.context import (
    clear_trace_context,
    get_trace_context,
    set_trace_context,
    trace_context,
    update_trace_context,
)
from pagedigest.tracing.decorators import (
    CustomSpanKinds,
    trace_method,
    trace_operation,
    track_state_change,
)
from pagedigest.tracing.graph import add_graph_attributes, pop_graph_node
from pagedigest.tracing.instrumentation import PageDigestInstrumentor, instrument
from pagedigest.tracing.runtime import is_instrumented

__all__ = [
    "trace_context",
    "set_trace_context",
    "update_trace_context",
    "get_trace_context",
    "clear_trace_context",
    "trace_method",
    "trace_operation",
    "add_graph_attributes",
    "pop_graph_node",
    "track_state_change",
    "CustomSpanKinds",
    "PageDigestInstrumentor",
    "instrument",
    "is_instrumented",
]
