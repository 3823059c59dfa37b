"""Streaming utilities for PageDigest.

Provides helper functions for SSE (Server-Sent Events) streaming of
summarization events to a display that lives outside the process.
"""

import json
from typing import Dict, Any

from pydantic import BaseModel

from pagedigest.constants import (
    STREAM_HEADER_NAME,
    STREAM_HEADER_VERSION,
    STREAM_DONE_SENTINEL,
)


def get_streaming_headers() -> Dict[str, str]:
    """
    Get the required HTTP headers for SSE streaming responses.

    Returns:
        Dict of header name to value
    """
    return {
        STREAM_HEADER_NAME: STREAM_HEADER_VERSION,
        "Content-Type": "text/event-stream",
        "Cache-Control": "no-cache",
        "Connection": "keep-alive",
        "X-Accel-Buffering": "no",
    }


def format_sse_event(event: Dict[str, Any] | BaseModel) -> str:
    """
    Format an event as an SSE data line.

    Args:
        event: Event dictionary or pydantic event model to format

    Returns:
        Formatted SSE string: "data: {json}\n\n"
    """
    if isinstance(event, BaseModel):
        event = event.model_dump(mode="json")
    return f"data: {json.dumps(event)}\n\n"


def format_sse_done() -> str:
    """
    Get the SSE done sentinel string.

    Returns:
        Formatted SSE done string: "data: [DONE]\n\n"
    """
    return f"data: {STREAM_DONE_SENTINEL}\n\n"


__all__ = ["get_streaming_headers", "format_sse_event", "format_sse_done"]
