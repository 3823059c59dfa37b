"""
Utility modules for PageDigest.

This package provides common utilities for:
- General helpers (ID generation, environment variables)
- Logging with colored output and OpenTelemetry correlation
- Task registry for abandoning in-flight operations
- SSE formatting for event streams
"""

from pagedigest.utils.general import (
    generate_id,
    get_env_int,
    get_env_float,
    _env_flag,
    _load_json_dict,
)

from pagedigest.utils.logger import (
    OTelColorFormatter,
    setup_logging,
)

from pagedigest.utils.task_registry import (
    register_task,
    cancel_task,
    unregister_task,
    get_task,
)

from pagedigest.utils.streaming import (
    format_sse_event,
    format_sse_done,
    get_streaming_headers,
)

__all__ = [
    # General utilities
    "generate_id",
    "get_env_int",
    "get_env_float",
    "_env_flag",
    "_load_json_dict",
    # Logging
    "OTelColorFormatter",
    "setup_logging",
    # Task registry
    "register_task",
    "cancel_task",
    "unregister_task",
    "get_task",
    # Streaming
    "format_sse_event",
    "format_sse_done",
    "get_streaming_headers",
]
