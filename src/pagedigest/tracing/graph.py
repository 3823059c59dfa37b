"""Graph node helpers for tracing visualization of the pipeline stages."""

from __future__ import annotations

from contextvars import ContextVar

from opentelemetry import trace

# Stack of pipeline stage ids for automatic parent detection
_graph_node_stack: ContextVar[tuple[str, ...]] = ContextVar("graph_node_stack", default=())


def add_graph_attributes(
    span: trace.Span,
    node_id: str,
    parent_id: str | None = None,
    display_name: str | None = None,
) -> None:
    """Tag a span with its pipeline stage and push the stage on the stack."""
    stack = _graph_node_stack.get()
    if parent_id is None and stack:
        parent_id = stack[-1]

    span.set_attribute("graph.node.id", node_id)
    if parent_id:
        span.set_attribute("graph.node.parent_id", parent_id)
    span.set_attribute(
        "graph.node.display_name",
        display_name or node_id.replace("_", " ").title(),
    )

    _graph_node_stack.set(stack + (node_id,))


def pop_graph_node() -> None:
    """Pop the current stage from the graph node stack."""
    stack = _graph_node_stack.get()
    if stack:
        _graph_node_stack.set(stack[:-1])
