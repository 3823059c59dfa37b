"""Generation client: one cold, cancellable fragment stream per call."""

from __future__ import annotations

import logging
from contextlib import aclosing
from typing import AsyncIterator

from pagedigest.ai.prompt import GenerationPrompt
from pagedigest.ai.providers import GenerationProvider, get_generation_provider
from pagedigest.constants import NO_CONTENT_SENTINEL
from pagedigest.exceptions import CredentialMissingError, UpstreamError
from pagedigest.types.operation import CancellationToken

logger = logging.getLogger(__name__)


class GenerationClient:
    """
    Wraps a provider with the stream contract the orchestrator relies on.

    - fragments come out in provider order, empty deltas are skipped
    - a response that is the service's "no content" sentinel raises UpstreamError
    - a response with no text at all raises UpstreamError(reason="empty")
    - once the cancel token is set nothing else is yielded and the provider
      stream is closed
    """

    def __init__(
        self,
        provider: GenerationProvider | None = None,
        no_content_sentinel: str | None = NO_CONTENT_SENTINEL,
    ) -> None:
        self.provider = provider or get_generation_provider()
        self.no_content_sentinel = no_content_sentinel

    async def stream(
        self,
        credential: str,
        prompt: GenerationPrompt,
        *,
        cancel_token: CancellationToken | None = None,
    ) -> AsyncIterator[str]:
        if not credential:
            raise CredentialMissingError("No API key is set")

        def cancelled() -> bool:
            return cancel_token is not None and cancel_token.cancelled

        # Leading deltas are held only while they could still be the sentinel
        held: list[str] = []
        matching = bool(self.no_content_sentinel)
        yielded = 0

        async with aclosing(self.provider.stream_text(credential, prompt)) as deltas:
            async for delta in deltas:
                if cancelled():
                    logger.info("Generation stream cancelled by caller")
                    return
                if not delta:
                    continue

                if matching:
                    held.append(delta)
                    verdict = self._match_sentinel("".join(held))
                    if verdict == "sentinel":
                        raise UpstreamError(
                            "No content was provided by the webpage",
                            details="".join(held),
                            reason="no_content",
                        )
                    if verdict == "prefix":
                        continue
                    matching = False
                    for fragment in held:
                        if cancelled():
                            return
                        yielded += 1
                        yield fragment
                    held.clear()
                    continue

                yielded += 1
                yield delta

        if cancelled():
            return

        # A strict prefix of the sentinel is ordinary text
        for fragment in held:
            yielded += 1
            yield fragment

        if yielded == 0:
            raise UpstreamError(
                "The generation service returned an empty result",
                reason="empty",
            )
        logger.debug(f"Generation stream finished with {yielded} fragments")

    def _match_sentinel(self, text: str) -> str:
        head = text.lstrip().lstrip('"')
        sentinel = self.no_content_sentinel or ""
        if head.startswith(sentinel):
            return "sentinel"
        if sentinel.startswith(head):
            return "prefix"
        return "diverged"


__all__ = ["GenerationClient"]
