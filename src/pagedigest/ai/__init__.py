"""Generation and orchestration for page summaries."""

from pagedigest.ai.client import GenerationClient
from pagedigest.ai.orchestrator import SummarizationOrchestrator
from pagedigest.ai.prompt import GenerationPrompt, PromptTemplate
from pagedigest.ai.providers import (
    GenerationProvider,
    MockGenerationProvider,
    OpenAIChatCompletionAPI,
    get_generation_provider,
)

__all__ = [
    "GenerationClient",
    "SummarizationOrchestrator",
    "GenerationPrompt",
    "PromptTemplate",
    "GenerationProvider",
    "MockGenerationProvider",
    "OpenAIChatCompletionAPI",
    "get_generation_provider",
]
