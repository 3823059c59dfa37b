"""Generation provider abstraction."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import AsyncIterator

from pagedigest.ai.prompt import GenerationPrompt


class GenerationProvider(ABC):
    """A remote text-generation service that streams text deltas."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name for identification."""
        pass

    @abstractmethod
    def stream_text(self, credential: str, prompt: GenerationPrompt) -> AsyncIterator[str]:
        """Open one streamed exchange and yield text deltas in arrival order.

        Implementations are async generators. Closing the generator must
        release the underlying connection. Failures are raised as
        ``GenerationError`` subclasses.
        """
        pass
