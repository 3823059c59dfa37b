"""Event stream constants."""

STREAM_HEADER_NAME = "x-pagedigest-stream"
STREAM_HEADER_VERSION = "v1"
STREAM_DONE_SENTINEL = "[DONE]"

# Event types
STREAM_EVENT_STATE = "state"
STREAM_EVENT_RENDER = "render"
STREAM_EVENT_CREDENTIAL_REQUIRED = "credential_required"
STREAM_EVENT_ERROR = "error"
STREAM_EVENT_COMPLETED = "completed"
