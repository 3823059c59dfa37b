"""Serialization and span-attribute helper functions for tracing."""

from __future__ import annotations

from dataclasses import asdict, is_dataclass
from datetime import date, datetime
from enum import Enum
import json
import logging
from typing import Any, Mapping

from openinference.semconv.trace import SpanAttributes
from opentelemetry import trace

logger = logging.getLogger(__name__)

MAX_OUTPUT_LENGTH = 10000


def _set_span_attributes(span: trace.Span, attributes: Mapping[str, Any]) -> None:
    """Set multiple attributes on a span, skipping None/empty values."""
    for key, value in attributes.items():
        if value:
            span.set_attribute(key, value)


def _serialize_for_json(obj: Any) -> Any:
    """Custom JSON serializer for enums, datetimes, dataclasses, and pydantic models."""
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, (datetime, date)):
        return obj.isoformat()
    if hasattr(obj, "model_dump"):
        return obj.model_dump(mode="json")
    if is_dataclass(obj) and not isinstance(obj, type):
        return _serialize_for_json(asdict(obj))
    if isinstance(obj, dict):
        return {k: _serialize_for_json(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_serialize_for_json(item) for item in obj]
    return obj


def _attach_output_to_span(span: trace.Span, result: Any) -> None:
    """Attach serializable output value to a span."""
    try:
        if result is None:
            return

        serialized = _serialize_for_json(result)
        if isinstance(serialized, str):
            output_value = serialized
        elif isinstance(serialized, (dict, list, int, float, bool)):
            output_value = json.dumps(serialized)
        else:
            logger.debug("Could not serialize output of type %s", type(result))
            return

        if len(output_value) > MAX_OUTPUT_LENGTH:
            output_value = output_value[:MAX_OUTPUT_LENGTH] + "... [truncated]"
            logger.debug("Output truncated to %s chars for span", MAX_OUTPUT_LENGTH)

        span.set_attribute(SpanAttributes.OUTPUT_VALUE, output_value)
    except (TypeError, ValueError) as exc:
        logger.warning("Failed to attach output to span: %s", exc)
