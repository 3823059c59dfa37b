"""
End-to-end scenarios for the summarization orchestrator.

Real extractor, generation client, renderer and prompt template are wired to
fake surfaces and scripted providers.
"""

import asyncio
import gc
import json

import pytest

from pagedigest.credentials import InMemoryCredentialStore
from pagedigest.exceptions import AuthError, FailureKind, TransportError
from pagedigest.types.summary import (
    CompletedEvent,
    CredentialRequiredEvent,
    FailureEvent,
    RenderEvent,
    StateChangedEvent,
    SummaryState,
)
from pagedigest.utils.task_registry import cancel_task, get_task
from tests.fakes import FakePageSurface, ScriptedProvider, StreamScript


def record_events(orchestrator) -> list:
    events: list = []
    orchestrator.add_listener(events.append)
    return events


def states(events) -> list[SummaryState]:
    return [event.state for event in events if isinstance(event, StateChangedEvent)]


def of_type(events, event_type) -> list:
    return [event for event in events if isinstance(event, event_type)]


async def wait_for(predicate, attempts: int = 200) -> None:
    for _ in range(attempts):
        if predicate():
            return
        await asyncio.sleep(0)
    raise AssertionError("condition not reached")


def paused_script(fragments: list[str], pause_after: int) -> StreamScript:
    return StreamScript(fragments=fragments, pause_after=pause_after, gate=asyncio.Event())


@pytest.mark.asyncio
async def test_summary_streams_and_completes(orchestrator, provider, display):
    events = record_events(orchestrator)

    task = orchestrator.start()
    await task

    assert orchestrator.state == SummaryState.COMPLETED
    assert display.text == "Hello World."
    assert display.is_rendering is False
    assert provider.prompts[0].user_content == "Summarize: Title\n\nHello world"
    assert provider.prompts[0].instructions == "Be brief."
    assert states(events) == [
        SummaryState.EXTRACTING,
        SummaryState.STREAMING,
        SummaryState.RENDERING,
        SummaryState.COMPLETED,
    ]
    completed = of_type(events, CompletedEvent)
    assert [event.text for event in completed] == ["Hello World."]
    assert completed[0].operation_id == orchestrator.operation_id


@pytest.mark.asyncio
async def test_start_without_credential_waits_for_one(make_orchestrator, surface, provider, display):
    credentials = InMemoryCredentialStore()
    orchestrator = make_orchestrator(credentials=credentials)
    events = record_events(orchestrator)

    assert orchestrator.start() is None
    assert orchestrator.state == SummaryState.AWAITING_CREDENTIAL
    assert [event.reason for event in of_type(events, CredentialRequiredEvent)] == ["missing"]
    assert surface.calls == 0
    assert provider.calls == 0

    task = orchestrator.submit_credential("sk-new")
    await task

    assert credentials.get() == "sk-new"
    assert provider.credentials == ["sk-new"]
    assert orchestrator.state == SummaryState.COMPLETED
    assert display.text == "Hello World."


@pytest.mark.asyncio
async def test_empty_credential_submission_is_ignored(orchestrator, credentials):
    assert orchestrator.submit_credential("   ") is None
    assert credentials.get() == "sk-test"
    assert orchestrator.state == SummaryState.IDLE


@pytest.mark.asyncio
async def test_stream_without_text_fails_as_upstream(make_orchestrator, display):
    orchestrator = make_orchestrator(provider=ScriptedProvider(StreamScript(fragments=[])))
    events = record_events(orchestrator)

    await orchestrator.start()

    assert orchestrator.state == SummaryState.FAILED
    assert orchestrator.failure.kind == FailureKind.UPSTREAM
    assert display.text == ""
    failure = of_type(events, FailureEvent)[0]
    assert failure.partial_text == ""
    assert failure.allow_credential_update is True


@pytest.mark.asyncio
async def test_rejected_credential_keeps_partial_text_and_recovers(make_orchestrator, display, credentials):
    provider = ScriptedProvider(
        StreamScript(fragments=["Partial"], error=AuthError("The API key provided seems to be incorrect")),
        StreamScript(fragments=["New ", "summary"]),
    )
    orchestrator = make_orchestrator(provider=provider)
    events = record_events(orchestrator)

    await orchestrator.start()

    assert orchestrator.state == SummaryState.FAILED
    assert orchestrator.failure.kind == FailureKind.CREDENTIAL_INVALID
    assert display.text == "Partial"
    failure = of_type(events, FailureEvent)[0]
    assert failure.partial_text == "Partial"
    assert failure.allow_credential_update is True
    assert [event.reason for event in of_type(events, CredentialRequiredEvent)] == ["invalid"]

    mark = display.mark()
    task = orchestrator.submit_credential("sk-fixed")

    assert orchestrator.state == SummaryState.EXTRACTING
    assert display.since(mark)[0] == ("", False)
    await task
    assert credentials.get() == "sk-fixed"
    assert display.text == "New summary"
    assert orchestrator.failure is None


@pytest.mark.asyncio
async def test_transport_failure_keeps_partial_text(make_orchestrator, display):
    provider = ScriptedProvider(StreamScript(fragments=["Part"], error=TransportError("Could not reach the service")))
    orchestrator = make_orchestrator(provider=provider)
    events = record_events(orchestrator)

    await orchestrator.start()

    assert orchestrator.failure.kind == FailureKind.TRANSPORT
    assert display.text == "Part"
    assert of_type(events, CredentialRequiredEvent) == []


@pytest.mark.asyncio
async def test_extraction_failure_never_calls_the_service(make_orchestrator, provider):
    orchestrator = make_orchestrator(surface=FakePageSurface(error=RuntimeError("page crashed")))
    events = record_events(orchestrator)

    await orchestrator.start()

    assert orchestrator.state == SummaryState.FAILED
    assert orchestrator.failure.kind == FailureKind.EXTRACTION_FAILED
    assert of_type(events, FailureEvent)[0].allow_credential_update is False
    assert provider.calls == 0


@pytest.mark.asyncio
@pytest.mark.parametrize("page", [None, lambda: None], ids=["none", "callable-none"])
async def test_missing_page_fails_with_no_surface(make_orchestrator, page):
    orchestrator = make_orchestrator(surface=page)

    await orchestrator.start()

    assert orchestrator.failure.kind == FailureKind.NO_SURFACE


@pytest.mark.asyncio
async def test_failing_surface_source_fails_the_operation(make_orchestrator, provider):
    def web_view_gone():
        raise RuntimeError("web view gone")

    orchestrator = make_orchestrator(surface=web_view_gone)
    events = record_events(orchestrator)

    await orchestrator.start()

    assert orchestrator.state == SummaryState.FAILED
    assert orchestrator.failure.kind == FailureKind.EXTRACTION_FAILED
    assert "web view gone" in orchestrator.failure.detail
    assert [event.kind for event in of_type(events, FailureEvent)] == [FailureKind.EXTRACTION_FAILED]
    assert provider.calls == 0

    retry = orchestrator.regenerate()
    assert retry is not None
    await retry
    assert orchestrator.state == SummaryState.FAILED


@pytest.mark.asyncio
async def test_blank_page_fails_with_empty_content(make_orchestrator):
    orchestrator = make_orchestrator(surface=FakePageSurface("   "))

    await orchestrator.start()

    assert orchestrator.failure.kind == FailureKind.EMPTY_CONTENT


@pytest.mark.asyncio
async def test_start_while_in_flight_returns_the_running_task(orchestrator, surface, provider):
    gate = surface.hold()

    first = orchestrator.start()
    second = orchestrator.start()
    gate.set()
    await first

    assert first is second
    assert provider.calls == 1


@pytest.mark.asyncio
async def test_rapid_regenerates_coalesce_into_one_stream(orchestrator, surface, provider, display):
    await orchestrator.start()
    gate = surface.hold()

    first = orchestrator.regenerate()
    second = orchestrator.regenerate()
    assert first is second
    assert orchestrator.state == SummaryState.EXTRACTING

    gate.set()
    await first

    assert provider.calls == 2
    assert surface.calls == 2
    assert orchestrator.state == SummaryState.COMPLETED
    assert display.text == "Hello World."


@pytest.mark.asyncio
async def test_regenerate_mid_stream_never_mixes_old_text(make_orchestrator, display):
    old = paused_script(["Old ", "sum", "mary"], pause_after=2)
    provider = ScriptedProvider(old, StreamScript(fragments=["Fresh"]))
    orchestrator = make_orchestrator(provider=provider)
    events = record_events(orchestrator)

    first = orchestrator.start()
    await wait_for(lambda: provider.yielded == 2)
    assert orchestrator.state == SummaryState.STREAMING

    second = orchestrator.regenerate()
    assert display.text == ""
    mark = display.mark()
    old.gate.set()
    await second
    await asyncio.gather(first, return_exceptions=True)

    assert display.text == "Fresh"
    assert all("Fresh".startswith(text) for text, _ in display.since(mark))
    assert provider.closed == 2
    assert SummaryState.CANCELLED in states(events)
    assert orchestrator.state == SummaryState.COMPLETED


@pytest.mark.asyncio
async def test_dismiss_mid_stream_discards_the_operation(make_orchestrator, display):
    paused = paused_script(["One ", "two"], pause_after=1)
    provider = ScriptedProvider(paused, StreamScript(fragments=["Again"]))
    orchestrator = make_orchestrator(provider=provider)

    first = orchestrator.start()
    await wait_for(lambda: provider.yielded == 1)

    orchestrator.dismiss()
    assert orchestrator.state == SummaryState.IDLE
    assert display.text == ""

    paused.gate.set()
    await asyncio.gather(first, return_exceptions=True)
    await asyncio.sleep(0.01)
    assert display.text == ""
    assert provider.closed == 1
    assert provider.yielded == 1

    await orchestrator.start()
    assert display.text == "Again"


@pytest.mark.asyncio
async def test_cancelling_through_the_task_registry_returns_to_idle(make_orchestrator, display):
    paused = paused_script(["a", "b"], pause_after=1)
    provider = ScriptedProvider(paused)
    orchestrator = make_orchestrator(provider=provider)

    task = orchestrator.start()
    operation_id = orchestrator.operation_id
    await wait_for(lambda: provider.yielded == 1)
    assert get_task(operation_id) is task

    assert cancel_task(operation_id) is True
    await asyncio.gather(task, return_exceptions=True)

    assert orchestrator.state == SummaryState.IDLE
    assert orchestrator.operation_id is None
    assert display.text == ""
    assert get_task(operation_id) is None


@pytest.mark.asyncio
async def test_finished_operations_leave_the_registry(orchestrator):
    task = orchestrator.start()
    operation_id = orchestrator.operation_id
    await task
    await asyncio.sleep(0)

    assert get_task(operation_id) is None


@pytest.mark.asyncio
async def test_regenerate_is_ignored_when_idle(orchestrator, provider):
    assert orchestrator.regenerate() is None
    assert orchestrator.state == SummaryState.IDLE
    assert provider.calls == 0


@pytest.mark.asyncio
async def test_regenerate_is_ignored_while_awaiting_a_credential(make_orchestrator, provider):
    orchestrator = make_orchestrator(credentials=InMemoryCredentialStore())
    orchestrator.start()

    assert orchestrator.regenerate() is None
    assert orchestrator.state == SummaryState.AWAITING_CREDENTIAL
    assert provider.calls == 0


@pytest.mark.asyncio
async def test_dismiss_after_failure_resets_everything(make_orchestrator, display):
    orchestrator = make_orchestrator(provider=ScriptedProvider(StreamScript(fragments=[])))
    await orchestrator.start()

    orchestrator.dismiss()

    assert orchestrator.state == SummaryState.IDLE
    assert orchestrator.failure is None
    assert display.text == ""


@pytest.mark.asyncio
async def test_broken_listener_does_not_break_the_pipeline(orchestrator, display):
    def broken(event):
        raise RuntimeError("listener bug")

    orchestrator.add_listener(broken)
    await orchestrator.start()

    assert orchestrator.state == SummaryState.COMPLETED
    assert display.text == "Hello World."


@pytest.mark.asyncio
async def test_removed_listener_stops_receiving_events(orchestrator):
    events: list = []
    remove = orchestrator.add_listener(events.append)
    remove()

    await orchestrator.start()

    assert events == []


@pytest.mark.asyncio
async def test_subscribers_receive_events_in_order_until_closed(orchestrator):
    subscription = orchestrator.subscribe()

    await orchestrator.start()
    await orchestrator.aclose()
    events = [event async for event in subscription]

    assert states(events)[:4] == [
        SummaryState.EXTRACTING,
        SummaryState.STREAMING,
        SummaryState.RENDERING,
        SummaryState.COMPLETED,
    ]
    assert states(events)[-1] == SummaryState.IDLE
    assert [event.text for event in of_type(events, CompletedEvent)] == ["Hello World."]


@pytest.mark.asyncio
async def test_sse_stream_ends_with_done_sentinel(orchestrator):
    lines = orchestrator.stream_sse()

    await orchestrator.start()
    await orchestrator.aclose()
    collected = [line async for line in lines]

    assert collected[-1] == "data: [DONE]\n\n"
    payloads = [json.loads(line[len("data: "):]) for line in collected[:-1]]
    assert all(line.startswith("data: ") and line.endswith("\n\n") for line in collected)
    completed = [payload for payload in payloads if payload["type"] == "completed"]
    assert completed[0]["text"] == "Hello World."


@pytest.mark.asyncio
async def test_dropped_subscription_stops_collecting_events(orchestrator):
    live = orchestrator.subscribe()
    orchestrator.subscribe()
    gc.collect()

    await orchestrator.start()

    assert orchestrator.subscriber_count == 1
    await orchestrator.aclose()
    assert [event async for event in live]
    assert orchestrator.subscriber_count == 0


@pytest.mark.asyncio
async def test_display_reset_belongs_to_the_new_operation(orchestrator):
    await orchestrator.start()
    previous_id = orchestrator.operation_id
    events = record_events(orchestrator)

    task = orchestrator.regenerate()

    resets = [event for event in of_type(events, RenderEvent) if event.text == ""]
    assert resets[0].operation_id == orchestrator.operation_id
    assert resets[0].operation_id != previous_id
    await task
