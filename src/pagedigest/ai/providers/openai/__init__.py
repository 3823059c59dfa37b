from pagedigest.ai.providers.openai.chat_completion import OpenAIChatCompletionAPI

__all__ = [
    "OpenAIChatCompletionAPI",
]
