"""
Shared fixtures.

Every fixture builds real pipeline components wired to fakes, with rendering
delays disabled so tests do not depend on wall-clock timing.
"""

from __future__ import annotations

import pytest

from pagedigest.ai.client import GenerationClient
from pagedigest.ai.orchestrator import SummarizationOrchestrator
from pagedigest.ai.prompt import PromptTemplate
from pagedigest.credentials import InMemoryCredentialStore
from pagedigest.render import IncrementalRenderer
from tests.fakes import FakePageSurface, RecordingDisplay, ScriptedProvider, StreamScript


@pytest.fixture()
def surface() -> FakePageSurface:
    return FakePageSurface("Title\n\nHello world")


@pytest.fixture()
def credentials() -> InMemoryCredentialStore:
    return InMemoryCredentialStore("sk-test")


@pytest.fixture()
def provider() -> ScriptedProvider:
    return ScriptedProvider(StreamScript(fragments=["Hel", "lo ", "World."]))


@pytest.fixture()
def display() -> RecordingDisplay:
    return RecordingDisplay()


@pytest.fixture()
def prompt() -> PromptTemplate:
    return PromptTemplate(template="Summarize: {content}", instructions="Be brief.", max_body_chars=None)


@pytest.fixture()
def make_orchestrator(surface, credentials, provider, display, prompt):
    """Factory so tests can override single collaborators."""

    def factory(**overrides) -> SummarizationOrchestrator:
        renderer = overrides.pop("renderer", None) or IncrementalRenderer(
            granularity=overrides.pop("granularity", "character"),
            unit_delay=overrides.pop("unit_delay", 0),
        )
        return SummarizationOrchestrator(
            overrides.pop("surface", surface),
            overrides.pop("credentials", credentials),
            display=overrides.pop("display", display),
            client=GenerationClient(overrides.pop("provider", provider)),
            renderer=renderer,
            prompt=overrides.pop("prompt", prompt),
        )

    return factory


@pytest.fixture()
def orchestrator(make_orchestrator) -> SummarizationOrchestrator:
    return make_orchestrator()
