"""Type definitions for PageDigest."""

from pagedigest.types.content import ExtractedContent
from pagedigest.types.llm import APIType, LLMModelConfig
from pagedigest.types.operation import CancellationToken, OperationReason, SummarizationOperation
from pagedigest.types.render import RenderState
from pagedigest.types.summary import (
    IN_FLIGHT_STATES,
    REGENERATE_STATES,
    CompletedEvent,
    CredentialRequiredEvent,
    FailureEvent,
    RenderEvent,
    StateChangedEvent,
    SummaryEvent,
    SummaryFailure,
    SummaryState,
)
from pagedigest.exceptions import FailureKind

__all__ = [
    # Content types
    "ExtractedContent",
    # LLM types
    "APIType",
    "LLMModelConfig",
    # Operation types
    "CancellationToken",
    "OperationReason",
    "SummarizationOperation",
    # Render types
    "RenderState",
    # Summary types
    "SummaryState",
    "IN_FLIGHT_STATES",
    "REGENERATE_STATES",
    "SummaryFailure",
    "FailureKind",
    "StateChangedEvent",
    "RenderEvent",
    "CredentialRequiredEvent",
    "FailureEvent",
    "CompletedEvent",
    "SummaryEvent",
]
