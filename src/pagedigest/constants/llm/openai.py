"""OpenAI-specific LLM constants."""

# OpenAI LLM API types
LLM_API_TYPE_CHAT_COMPLETION = "chat_completion"

OPENAI_CHAT_COMPLETIONS_ALLOWED_REQUEST_KWARGS: set[str] = {
    "frequency_penalty",
    "logit_bias",
    "max_completion_tokens",
    "max_tokens",
    "presence_penalty",
    "seed",
    "stop",
    "top_p",
    "user",
}
