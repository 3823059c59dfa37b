"""Content extraction from a rendered page surface."""

from __future__ import annotations

import asyncio
import inspect
import logging
from concurrent.futures import Executor

from openinference.semconv.trace import OpenInferenceSpanKindValues

from pagedigest.exceptions import (
    EmptyContentError,
    ExtractionError,
    ExtractionFailedError,
    NoSurfaceError,
)
from pagedigest.protocols import PageSurface
from pagedigest.tracing import trace_method
from pagedigest.types.content import ExtractedContent

logger = logging.getLogger(__name__)


class ContentExtractor:
    """
    Pulls title and body text out of a page surface.

    Page surfaces are not thread-safe. A surface whose ``extract_text`` is a
    plain function is called on ``surface_context`` (typically a single-thread
    executor owning the page); without one it is called on the event loop
    thread. Coroutine ``extract_text`` implementations are awaited directly.
    No retries happen here.
    """

    def __init__(self, surface_context: Executor | None = None) -> None:
        self.surface_context = surface_context

    @trace_method(
        kind=OpenInferenceSpanKindValues.RETRIEVER,
        graph_node_id="content_extraction",
        capture_input=True,
        capture_output=True,
    )
    async def extract(self, surface: PageSurface | None) -> ExtractedContent:
        """
        Extract the readable content of the currently loaded page.

        Raises:
            NoSurfaceError: No page is loaded
            EmptyContentError: The page text is empty after trimming
            ExtractionFailedError: The surface failed while evaluating
        """
        if surface is None or not getattr(surface, "current_url", None):
            raise NoSurfaceError("No page is currently loaded")

        try:
            raw = await self._evaluate(surface)
        except ExtractionError:
            raise
        except Exception as exc:
            raise ExtractionFailedError(
                "The page could not be read",
                details=f"{type(exc).__name__}: {exc}",
            ) from exc

        if not isinstance(raw, str) or not raw.strip():
            raise EmptyContentError(
                "This website has no content or blocked the summary request",
                details=surface.current_url,
            )

        content = ExtractedContent.from_text(raw)
        logger.info(
            f"Extracted {len(content.body)} body chars from {surface.current_url}"
        )
        return content

    async def _evaluate(self, surface: PageSurface) -> object:
        extract_text = surface.extract_text
        if inspect.iscoroutinefunction(extract_text):
            return await extract_text()

        if self.surface_context is not None:
            loop = asyncio.get_running_loop()
            result = await loop.run_in_executor(self.surface_context, extract_text)
        else:
            result = extract_text()

        if inspect.isawaitable(result):
            return await result
        return result


__all__ = ["ContentExtractor"]
