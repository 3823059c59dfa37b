"""Incremental, cancellable rendering of streamed text into the display."""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from dataclasses import dataclass

from pagedigest.constants import RENDER_GRANULARITY_CHARACTER, RENDER_GRANULARITY_FRAGMENT
from pagedigest.protocols import DisplaySink
from pagedigest.types.render import RenderState

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _DisplayUnit:
    generation: int
    text: str


class IncrementalRenderer:
    """
    Owns RenderState and reveals appended text progressively.

    Appended text is split into display units (one per character, or one per
    fragment) and queued. A drain task on the owning event loop applies units
    in order, pausing ``unit_delay`` seconds between them. Every unit is tagged
    with the generation it was appended under; ``cancel_pending`` bumps the
    generation, so units queued before it are dropped. The generation check and
    the mutation it guards run without an await in between.

    Units are never dropped for speed. Past ``max_backlog`` queued units, new
    text is merged into the last queued unit, so the display catches up in
    larger steps instead.
    """

    def __init__(
        self,
        sink: DisplaySink | None = None,
        *,
        granularity: str | None = None,
        unit_delay: float | None = None,
        max_backlog: int | None = None,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        from pagedigest import config

        self.sink = sink
        self.granularity = granularity or config.RENDER_GRANULARITY
        if self.granularity not in (RENDER_GRANULARITY_CHARACTER, RENDER_GRANULARITY_FRAGMENT):
            raise ValueError(f"Unknown render granularity: {self.granularity}")
        self.unit_delay = config.RENDER_UNIT_DELAY if unit_delay is None else unit_delay
        self.max_backlog = config.RENDER_MAX_BACKLOG if max_backlog is None else max_backlog

        self._loop = loop
        self._state = RenderState()
        self._generation = 0
        self._finished = False
        self._units: deque[_DisplayUnit] = deque()
        self._drain_task: asyncio.Task | None = None
        self._idle: asyncio.Event | None = None

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def state(self) -> RenderState:
        return self._state.snapshot()

    @property
    def text(self) -> str:
        return self._state.text

    @property
    def is_rendering(self) -> bool:
        return self._state.is_rendering

    @property
    def pending_units(self) -> int:
        return len(self._units)

    def reset(self) -> int:
        """Discard pending units, clear the text and return the new generation."""
        self.cancel_pending()
        self._state = RenderState()
        self._emit()
        return self._generation

    def cancel_pending(self) -> int:
        """
        Invalidate every queued display unit and stop the drain task.

        After this returns no unit appended before it is applied. The text
        already shown stays as it is.
        """
        self._bind_loop()
        self._generation += 1
        dropped = len(self._units)
        self._units.clear()
        self._finished = False

        task, self._drain_task = self._drain_task, None
        if task is not None and not task.done():
            task.cancel()

        self._idle_event().set()
        if self._state.is_rendering:
            self._state.is_rendering = False
            self._emit()
        if dropped:
            logger.debug(f"Dropped {dropped} pending display units")
        return self._generation

    def append(self, text: str, generation: int | None = None) -> None:
        """
        Queue text for display.

        Safe to call from any thread; calls from outside the owning loop are
        marshaled onto it. ``generation`` defaults to the current one, callers
        that may be superseded pass the generation they started under.
        """
        if not text:
            return
        if generation is None:
            generation = self._generation

        if self._on_owning_loop():
            self._enqueue(text, generation)
            return
        if self._loop is None:
            raise RuntimeError("IncrementalRenderer has no event loop yet; call reset() on the loop first")
        self._loop.call_soon_threadsafe(self._enqueue, text, generation)

    def finish(self, generation: int | None = None) -> None:
        """Mark the end of input for a generation; rendering stops once the queue drains."""
        if generation is not None and generation != self._generation:
            return
        self._finished = True
        if not self._units and self._drain_task is None:
            self._settle()

    async def drain(self) -> None:
        """Wait until every queued unit has been applied or discarded."""
        self._bind_loop()
        await self._idle_event().wait()

    async def aclose(self) -> None:
        task = self._drain_task
        self.cancel_pending()
        if task is not None:
            try:
                await task
            except asyncio.CancelledError:
                pass

    def _enqueue(self, text: str, generation: int) -> None:
        self._bind_loop()
        if generation != self._generation:
            logger.debug(f"Ignoring text for stale render generation {generation}")
            return

        pieces = list(text) if self.granularity == RENDER_GRANULARITY_CHARACTER else [text]
        for piece in pieces:
            if self.max_backlog and len(self._units) >= self.max_backlog:
                last = self._units[-1]
                if last.generation == generation:
                    last.text += piece
                    continue
            self._units.append(_DisplayUnit(generation=generation, text=piece))

        self._idle_event().clear()
        if not self._state.is_rendering:
            self._state.is_rendering = True
            self._emit()
        if self._drain_task is None:
            self._drain_task = self._loop.create_task(self._drain())

    async def _drain(self) -> None:
        me = asyncio.current_task()
        try:
            while self._units and self._drain_task is me:
                unit = self._units.popleft()
                if unit.generation != self._generation:
                    continue
                self._state.text += unit.text
                self._emit()
                if self.unit_delay > 0 and self._units:
                    await asyncio.sleep(self.unit_delay)
        finally:
            if self._drain_task is me:
                self._drain_task = None
                if not self._units:
                    self._settle()

    def _settle(self) -> None:
        self._idle_event().set()
        if self._finished and self._state.is_rendering:
            self._state.is_rendering = False
            self._emit()

    def _emit(self) -> None:
        if self.sink is None:
            return
        try:
            self.sink.update(self._state.text, self._state.is_rendering)
        except Exception:
            logger.exception("Display sink failed to apply render update")

    def _bind_loop(self) -> None:
        if self._loop is None:
            try:
                self._loop = asyncio.get_running_loop()
            except RuntimeError:
                return

    def _on_owning_loop(self) -> bool:
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            return False
        if self._loop is None:
            self._loop = running
        return running is self._loop

    def _idle_event(self) -> asyncio.Event:
        if self._idle is None:
            self._idle = asyncio.Event()
            self._idle.set()
        return self._idle


__all__ = ["IncrementalRenderer"]
