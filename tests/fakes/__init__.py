"""
Fake implementations for testing.

Fakes are simplified working implementations of the pipeline's external
collaborators (page surface, generation service, display). They keep tests
fast and deterministic without network access or a real browser.

Key fakes:
- FakePageSurface / ThreadBoundPageSurface: page text sources
- ScriptedProvider: generation provider replaying scripted fragments/errors
- RecordingDisplay: display sink that records every update
"""

from tests.fakes.display import RecordingDisplay
from tests.fakes.providers import ScriptedProvider, StreamScript
from tests.fakes.surface import FakePageSurface, ThreadBoundPageSurface

__all__ = [
    "RecordingDisplay",
    "ScriptedProvider",
    "StreamScript",
    "FakePageSurface",
    "ThreadBoundPageSurface",
]
