"""OpenTelemetry instrumentor for PageDigest runtime spans."""

from __future__ import annotations

from collections.abc import Collection
from typing import Any

from opentelemetry import trace
from opentelemetry.instrumentation.instrumentor import BaseInstrumentor

from pagedigest.tracing import runtime as tracing_runtime


class PageDigestInstrumentor(BaseInstrumentor):  # type: ignore[misc]
    """Route PageDigest tracing decorators to a tracer provider."""

    def instrumentation_dependencies(self) -> Collection[str]:
        return []

    def _instrument(self, **kwargs: Any) -> None:
        tracer_provider = kwargs.get("tracer_provider") or trace.get_tracer_provider()
        tracing_runtime._set_tracer_provider(tracer_provider)
        tracing_runtime._set_instrumented(True)

    def _uninstrument(self, **kwargs: Any) -> None:
        tracing_runtime._clear_tracer_provider()
        tracing_runtime._set_instrumented(False)


def instrument(tracer_provider: Any | None = None) -> PageDigestInstrumentor:
    """Instrument PageDigest spans with the given (or global) tracer provider."""
    instrumentor = PageDigestInstrumentor()
    if instrumentor.is_instrumented_by_opentelemetry:
        instrumentor.uninstrument()
    instrumentor.instrument(tracer_provider=tracer_provider)
    return instrumentor


__all__ = ["PageDigestInstrumentor", "instrument"]
