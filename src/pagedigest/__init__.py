"""
PageDigest - Streaming page summarization pipeline.
"""

from pagedigest.tracing import instrument, is_instrumented
from pagedigest.utils.logger import setup_logging
from pagedigest.ai import GenerationClient, PromptTemplate, SummarizationOrchestrator
from pagedigest.credentials import FileCredentialStore, InMemoryCredentialStore
from pagedigest.extraction import ContentExtractor
from pagedigest.render import IncrementalRenderer
from pagedigest.types import ExtractedContent, SummaryState

__all__ = [
    "instrument",
    "is_instrumented",
    "setup_logging",
    "SummarizationOrchestrator",
    "GenerationClient",
    "PromptTemplate",
    "ContentExtractor",
    "IncrementalRenderer",
    "FileCredentialStore",
    "InMemoryCredentialStore",
    "ExtractedContent",
    "SummaryState",
]
