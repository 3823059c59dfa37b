from __future__ import annotations

import asyncio
import logging
import weakref
from contextlib import aclosing
from typing import AsyncGenerator, AsyncIterator, Callable

from openinference.semconv.trace import OpenInferenceSpanKindValues
from opentelemetry import trace

from pagedigest.ai.client import GenerationClient
from pagedigest.ai.prompt import PromptTemplate
from pagedigest.exceptions import (
    AuthError,
    CredentialMissingError,
    ExtractionError,
    ExtractionFailedError,
    GenerationError,
    OperationSupersededError,
    PageDigestError,
)
from pagedigest.extraction import ContentExtractor
from pagedigest.protocols import CredentialStore, DisplaySink, PageSurface
from pagedigest.render import IncrementalRenderer
from pagedigest.tracing import trace_context, trace_method, track_state_change, update_trace_context
from pagedigest.types.operation import OperationReason, SummarizationOperation
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
from pagedigest.utils.streaming import format_sse_done, format_sse_event
from pagedigest.utils.task_registry import register_task, unregister_task

logger = logging.getLogger(__name__)

SurfaceSource = PageSurface | Callable[[], PageSurface | None] | None
EventListener = Callable[[SummaryEvent], None]


class SummarizationOrchestrator:
    """
    Drives one page summary at a time: extract, stream, render.

    All public methods must be called on the event loop that owns the
    renderer. They check and replace the active operation synchronously, so
    no other operation can interleave between the check and the swap.
    """

    def __init__(
        self,
        surface: SurfaceSource,
        credentials: CredentialStore,
        *,
        display: DisplaySink | None = None,
        extractor: ContentExtractor | None = None,
        client: GenerationClient | None = None,
        renderer: IncrementalRenderer | None = None,
        prompt: PromptTemplate | None = None,
    ) -> None:
        self.surface = surface
        self.credentials = credentials
        self.display = display
        self.extractor = extractor or ContentExtractor()
        self.client = client or GenerationClient()
        self.prompt = prompt or PromptTemplate.from_env()
        self.renderer = renderer or IncrementalRenderer()
        self.renderer.sink = self

        self._state = SummaryState.IDLE
        self._operation: SummarizationOperation | None = None
        self._task: asyncio.Task | None = None
        self._failure: SummaryFailure | None = None
        self._listeners: list[EventListener] = []
        self._subscribers: set[asyncio.Queue] = set()

    @property
    def state(self) -> SummaryState:
        return self._state

    @property
    def failure(self) -> SummaryFailure | None:
        return self._failure

    @property
    def render_state(self) -> RenderState:
        return self.renderer.state

    @property
    def operation_id(self) -> str | None:
        return self._operation.id if self._operation else None

    @property
    def task(self) -> asyncio.Task | None:
        return self._task

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def add_listener(self, listener: EventListener) -> Callable[[], None]:
        """Register a synchronous event callback. Returns a function that removes it."""
        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    def subscribe(self) -> AsyncIterator[SummaryEvent]:
        """
        Subscribe to events. Events published after this call are delivered in
        order; the iterator ends when the orchestrator is closed.
        """
        queue: asyncio.Queue = asyncio.Queue()
        self._subscribers.add(queue)
        events = self._iterate(queue)
        # An iterator dropped before its first step never runs its finally block
        weakref.finalize(events, self._subscribers.discard, queue)
        return events

    def stream_sse(self) -> AsyncGenerator[str, None]:
        """Subscribe to events formatted as SSE lines, ending with the DONE sentinel."""
        return self._sse(self.subscribe())

    def start(self) -> asyncio.Task | None:
        """
        Start summarizing the current page.

        Returns the operation task, the in-flight task if one is already
        running, or None when a credential has to be supplied first.
        """
        if self._state in IN_FLIGHT_STATES and self._task is not None:
            logger.info("Summary already in progress, ignoring start()")
            return self._task

        if not self.credentials.get():
            self._failure = None
            self._transition(SummaryState.AWAITING_CREDENTIAL)
            self._publish(CredentialRequiredEvent(reason="missing"))
            return None

        return self._launch("start")

    def regenerate(self) -> asyncio.Task | None:
        """
        Cancel the current summary and produce a new one.

        Repeated calls while the replacement is still extracting are coalesced
        into it.
        """
        if self._state == SummaryState.EXTRACTING and self._task is not None:
            logger.info("Regenerate already in progress, coalescing request")
            return self._task

        if self._state not in REGENERATE_STATES:
            logger.warning(f"regenerate() ignored in state {self._state.value}")
            return None

        self._transition(SummaryState.CANCELLED, self._operation)
        return self._launch("regenerate")

    def submit_credential(self, credential: str) -> asyncio.Task | None:
        """Store a new credential and restart summarization with it."""
        credential = (credential or "").strip()
        if not credential:
            logger.warning("Ignoring empty credential submission")
            return None

        self.credentials.set(credential)
        if self._state in IN_FLIGHT_STATES:
            self._transition(SummaryState.CANCELLED, self._operation)
        return self._launch("credential")

    def dismiss(self) -> None:
        """Abandon whatever is happening and go back to idle with an empty display."""
        self._cancel_active()
        self._operation = None
        self._failure = None
        self.renderer.reset()
        self._transition(SummaryState.IDLE)

    async def aclose(self) -> None:
        """Cancel any running operation and end all subscriptions."""
        task = self._task
        self.dismiss()
        if task is not None:
            await asyncio.gather(task, return_exceptions=True)
        await self.renderer.aclose()
        for queue in list(self._subscribers):
            queue.put_nowait(None)

    def update(self, text: str, is_rendering: bool) -> None:
        if self.display is not None:
            self.display.update(text, is_rendering)
        self._publish(RenderEvent(text=text, is_rendering=is_rendering, operation_id=self.operation_id))

    def _launch(self, reason: OperationReason) -> asyncio.Task:
        # The old operation is flagged before its replacement exists
        self._cancel_active()
        operation = SummarizationOperation(render_generation=self.renderer.generation, reason=reason)
        self._operation = operation
        # Reset after the swap so the cleared display belongs to the new operation
        operation.render_generation = self.renderer.reset()
        self._failure = None
        self._transition(SummaryState.EXTRACTING, operation)

        loop = asyncio.get_running_loop()
        task = loop.create_task(self._run_operation(operation), name=f"pagedigest-{operation.id}")
        self._task = task
        register_task(operation.id, task)
        task.add_done_callback(lambda t, op=operation: self._on_task_done(op, t))
        logger.info(f"Started summary operation {operation.id} ({reason})")
        return task

    def _cancel_active(self) -> None:
        if self._operation is not None:
            self._operation.cancel()
        task, self._task = self._task, None
        if task is not None and not task.done():
            task.cancel()
        self.renderer.cancel_pending()

    def _on_task_done(self, operation: SummarizationOperation, task: asyncio.Task) -> None:
        unregister_task(operation.id, task)
        if self._task is task:
            self._task = None
        if not task.cancelled() and task.exception() is not None:
            logger.error(f"Summary operation {operation.id} crashed", exc_info=task.exception())

    async def _run_operation(self, operation: SummarizationOperation) -> None:
        async with trace_context(operation_id=operation.id, reason=operation.reason):
            try:
                await self._summarize(operation)
            except OperationSupersededError:
                logger.debug(f"Discarding results of superseded operation {operation.id}")
            except asyncio.CancelledError:
                logger.info(f"Summary operation {operation.id} cancelled")
                if self._operation is operation and not operation.cancelled:
                    # Abandoned from outside (task registry), not superseded
                    operation.cancel()
                    self._operation = None
                    self.renderer.reset()
                    self._transition(SummaryState.IDLE, operation)

    @trace_method(
        kind=OpenInferenceSpanKindValues.CHAIN,
        graph_node_id="summarize_page",
        capture_input=True,
        capture_output=False,
    )
    async def _summarize(self, operation: SummarizationOperation) -> None:
        try:
            surface = self._resolve_surface()
            content = await self.extractor.extract(surface)
            self._ensure_current(operation)

            credential = self.credentials.get()
            if not credential:
                raise CredentialMissingError("No API key is set")

            prompt = self.prompt.render(content)
            self._transition(SummaryState.STREAMING, operation)

            fragments = self.client.stream(credential, prompt, cancel_token=operation.cancel_token)
            async with aclosing(fragments):
                async for fragment in fragments:
                    self._ensure_current(operation)
                    operation.accumulated += fragment
                    self.renderer.append(fragment, generation=operation.render_generation)

            self._ensure_current(operation)
            self._transition(SummaryState.RENDERING, operation)
            await self._finish_rendering(operation)

            self._transition(SummaryState.COMPLETED, operation)
            self._publish(CompletedEvent(text=operation.accumulated, operation_id=operation.id))
            logger.info(f"Summary operation {operation.id} completed ({len(operation.accumulated)} chars)")
        except OperationSupersededError:
            raise
        except CredentialMissingError:
            self._ensure_current(operation)
            self._transition(SummaryState.AWAITING_CREDENTIAL, operation)
            self._publish(CredentialRequiredEvent(reason="missing", operation_id=operation.id))
        except (ExtractionError, GenerationError) as exc:
            logger.warning(f"Summary operation {operation.id} failed: {exc!r}")
            await self._fail(operation, exc)
        except PageDigestError as exc:
            logger.error(f"Summary operation {operation.id} failed: {exc!r}")
            await self._fail(operation, exc)
        except Exception as exc:
            logger.exception(f"Unexpected error in summary operation {operation.id}")
            await self._fail(
                operation,
                PageDigestError("Failed to summarize the page.", details=f"{type(exc).__name__}: {exc}"),
            )

    async def _finish_rendering(self, operation: SummarizationOperation) -> None:
        self.renderer.finish(operation.render_generation)
        await self.renderer.drain()
        self._ensure_current(operation)

    async def _fail(self, operation: SummarizationOperation, exc: PageDigestError) -> None:
        self._ensure_current(operation)
        # Let the partial summary finish revealing so it stays alongside the failure
        await self._finish_rendering(operation)

        credential_invalid = isinstance(exc, AuthError)
        self._failure = SummaryFailure(kind=exc.kind, detail=str(exc), operation_id=operation.id)
        self._transition(SummaryState.FAILED, operation)
        self._publish(
            FailureEvent(
                kind=exc.kind,
                detail=str(exc),
                partial_text=self.renderer.text,
                allow_credential_update=isinstance(exc, GenerationError),
                operation_id=operation.id,
            )
        )
        if credential_invalid:
            self._publish(CredentialRequiredEvent(reason="invalid", operation_id=operation.id))

    def _ensure_current(self, operation: SummarizationOperation) -> None:
        if operation.cancelled or self._operation is not operation:
            raise OperationSupersededError(operation.id)

    def _transition(self, new_state: SummaryState, operation: SummarizationOperation | None = None) -> None:
        previous = self._state
        if previous == new_state:
            return
        self._state = new_state
        track_state_change("summary_state", previous, new_state)
        logger.debug(f"Summary state {previous.value} -> {new_state.value}")
        self._publish(
            StateChangedEvent(
                state=new_state,
                previous=previous,
                operation_id=operation.id if operation else None,
            )
        )

    def _resolve_surface(self) -> PageSurface | None:
        if self.surface is None or isinstance(self.surface, PageSurface):
            surface = self.surface
        else:
            try:
                surface = self.surface()
            except Exception as exc:
                raise ExtractionFailedError(
                    "The page could not be read",
                    details=f"{type(exc).__name__}: {exc}",
                ) from exc

        url = getattr(surface, "current_url", None)
        if url:
            update_trace_context(url=url)
            trace.get_current_span().set_attribute("page_url", url)
        return surface

    def _publish(self, event: SummaryEvent) -> None:
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception(f"Event listener failed on {event.type} event")
        for queue in self._subscribers:
            queue.put_nowait(event)

    async def _iterate(self, queue: asyncio.Queue) -> AsyncGenerator[SummaryEvent, None]:
        try:
            while True:
                event = await queue.get()
                if event is None:
                    break
                yield event
        finally:
            self._subscribers.discard(queue)

    async def _sse(self, events: AsyncIterator[SummaryEvent]) -> AsyncGenerator[str, None]:
        async for event in events:
            yield format_sse_event(event)
        yield format_sse_done()


__all__ = ["SummarizationOrchestrator"]
