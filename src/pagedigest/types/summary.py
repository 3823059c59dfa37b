"""Summarization state and caller-visible event types."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from pagedigest.constants import (
    STREAM_EVENT_COMPLETED,
    STREAM_EVENT_CREDENTIAL_REQUIRED,
    STREAM_EVENT_ERROR,
    STREAM_EVENT_RENDER,
    STREAM_EVENT_STATE,
)
from pagedigest.exceptions import FailureKind


class SummaryState(str, Enum):
    """Lifecycle states of the summarization orchestrator."""
    IDLE = "idle"
    AWAITING_CREDENTIAL = "awaiting_credential"
    EXTRACTING = "extracting"
    STREAMING = "streaming"
    RENDERING = "rendering"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


# States in which an operation task is running
IN_FLIGHT_STATES = frozenset({
    SummaryState.EXTRACTING,
    SummaryState.STREAMING,
    SummaryState.RENDERING,
})

REGENERATE_STATES = frozenset({
    SummaryState.STREAMING,
    SummaryState.RENDERING,
    SummaryState.COMPLETED,
    SummaryState.FAILED,
})


class SummaryFailure(BaseModel):
    """Terminal failure of an operation as shown to the caller."""

    kind: FailureKind
    detail: str
    operation_id: str | None = None


class StateChangedEvent(BaseModel):
    type: Literal["state"] = STREAM_EVENT_STATE
    state: SummaryState
    previous: SummaryState
    operation_id: str | None = None


class RenderEvent(BaseModel):
    type: Literal["render"] = STREAM_EVENT_RENDER
    text: str
    is_rendering: bool
    operation_id: str | None = None


class CredentialRequiredEvent(BaseModel):
    type: Literal["credential_required"] = STREAM_EVENT_CREDENTIAL_REQUIRED
    reason: Literal["missing", "invalid"]
    operation_id: str | None = None


class FailureEvent(BaseModel):
    """A terminal failure, carrying whatever text was rendered before it."""

    type: Literal["error"] = STREAM_EVENT_ERROR
    kind: FailureKind
    detail: str
    partial_text: str = ""
    allow_credential_update: bool = False
    operation_id: str | None = None


class CompletedEvent(BaseModel):
    type: Literal["completed"] = STREAM_EVENT_COMPLETED
    text: str
    operation_id: str | None = None


SummaryEvent = Annotated[
    Union[StateChangedEvent, RenderEvent, CredentialRequiredEvent, FailureEvent, CompletedEvent],
    Field(discriminator="type"),
]


__all__ = [
    "SummaryState",
    "IN_FLIGHT_STATES",
    "REGENERATE_STATES",
    "SummaryFailure",
    "StateChangedEvent",
    "RenderEvent",
    "CredentialRequiredEvent",
    "FailureEvent",
    "CompletedEvent",
    "SummaryEvent",
]
