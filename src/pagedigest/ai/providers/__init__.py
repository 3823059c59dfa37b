from pagedigest.ai.providers.base import GenerationProvider
from pagedigest.ai.providers.mock import MockGenerationProvider
from pagedigest.ai.providers.openai import OpenAIChatCompletionAPI
from pagedigest.constants import (
    LLM_API_TYPE_CHAT_COMPLETION,
    MOCK,
    OPENAI,
)
from pagedigest.types.llm import LLMModelConfig


def get_generation_provider(llm_config: LLMModelConfig | None = None) -> GenerationProvider:
    llm_config = llm_config or LLMModelConfig.from_env()
    if llm_config.provider == MOCK:
        return MockGenerationProvider()
    if llm_config.provider == OPENAI:
        if llm_config.api_type == LLM_API_TYPE_CHAT_COMPLETION:
            return OpenAIChatCompletionAPI(llm_config)
        raise ValueError(f"Unknown api_type for {OPENAI}: {llm_config.api_type}")
    raise ValueError(f"Unknown provider: {llm_config.provider}")


__all__ = [
    "GenerationProvider",
    "MockGenerationProvider",
    "OpenAIChatCompletionAPI",
    "get_generation_provider",
]
