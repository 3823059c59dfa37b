"""Summarization operation and cancellation primitives."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Literal

from pagedigest.constants import OPERATION_ID_LENGTH
from pagedigest.utils.general import generate_id

OperationReason = Literal["start", "regenerate", "credential"]


class CancellationToken:
    """One-shot cancellation flag that can also be awaited."""

    def __init__(self) -> None:
        self._event = asyncio.Event()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        self._event.set()

    async def wait(self) -> None:
        await self._event.wait()


@dataclass(slots=True)
class SummarizationOperation:
    """
    One end-to-end attempt to produce a summary.

    Owned by the orchestrator. The renderer and generation client only ever see
    the operation id, its render generation, and its cancellation token.
    """

    render_generation: int
    reason: OperationReason = "start"
    id: str = field(default_factory=lambda: generate_id(OPERATION_ID_LENGTH))
    cancel_token: CancellationToken = field(default_factory=CancellationToken)
    accumulated: str = ""
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def cancelled(self) -> bool:
        return self.cancel_token.cancelled

    def cancel(self) -> None:
        self.cancel_token.cancel()


__all__ = ["CancellationToken", "SummarizationOperation", "OperationReason"]
