import pytest
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

from pagedigest.credentials import FileCredentialStore
from pagedigest.tracing import (
    clear_trace_context,
    get_trace_context,
    instrument,
    is_instrumented,
    set_trace_context,
    trace_context,
    update_trace_context,
)


@pytest.fixture()
def exporter():
    exporter = InMemorySpanExporter()
    provider = TracerProvider()
    provider.add_span_processor(SimpleSpanProcessor(exporter))
    instrumentor = instrument(tracer_provider=provider)
    try:
        yield exporter
    finally:
        instrumentor.uninstrument()


def test_instrument_toggles_runtime_state(exporter):
    assert is_instrumented() is True


@pytest.mark.asyncio
async def test_operation_spans_carry_operation_context(exporter, orchestrator):
    await orchestrator.start()

    spans = {span.name: span for span in exporter.get_finished_spans()}
    summarize = spans["SummarizationOrchestrator._summarize"]
    extract = spans["ContentExtractor.extract"]

    assert extract.parent.span_id == summarize.context.span_id
    assert summarize.attributes["operation_id"] == orchestrator.operation_id
    assert summarize.attributes["operation_reason"] == "start"
    assert summarize.attributes["page_url"] == "https://example.com/article"
    assert summarize.attributes["graph.node.id"] == "summarize_page"
    assert extract.attributes["graph.node.parent_id"] == "summarize_page"
    assert summarize.attributes["state.summary_state.after"] == "completed"
    assert "Hello world" in extract.attributes["output.value"]


@pytest.mark.asyncio
async def test_failed_extraction_records_error_status(exporter, make_orchestrator):
    from tests.fakes import FakePageSurface

    orchestrator = make_orchestrator(surface=FakePageSurface(error=RuntimeError("page crashed")))
    await orchestrator.start()

    extract = next(span for span in exporter.get_finished_spans() if span.name == "ContentExtractor.extract")
    assert not extract.status.is_ok
    assert any(event.name == "exception" for event in extract.events)


def test_credential_access_is_traced(exporter, tmp_path):
    store = FileCredentialStore(tmp_path / "credentials.json", key="APIKey")

    store.set("sk-test")
    store.get()

    spans = [span for span in exporter.get_finished_spans() if span.name.startswith("FileCredentialStore.")]
    assert [span.name for span in spans] == ["FileCredentialStore.set", "FileCredentialStore.get"]
    assert spans[0].attributes["span.category"] == "CREDENTIAL"


def test_trace_context_helpers():
    set_trace_context(operation_id="op-1", url="https://example.com", reason="start")
    update_trace_context(reason="regenerate")

    assert get_trace_context() == {"operation_id": "op-1", "url": "https://example.com", "reason": "regenerate"}
    clear_trace_context()
    assert get_trace_context() == {}


@pytest.mark.asyncio
async def test_trace_context_manager_clears_on_exit():
    async with trace_context(operation_id="op-2"):
        assert get_trace_context()["operation_id"] == "op-2"

    assert get_trace_context() == {}
