"""General LLM constants shared across providers."""

# Providers
OPENAI = "openai"
MOCK = "mock"

# Model defaults
GPT_3_5_TURBO = "gpt-3.5-turbo"
DEFAULT_LLM_TIMEOUT_SECONDS = 60.0
DEFAULT_LLM_TEMPERATURE = 0.3
