"""LLM configuration types for provider/model routing."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from pagedigest.constants import LLM_API_TYPE_CHAT_COMPLETION


APIType = Literal["chat_completion"]


class LLMModelConfig(BaseModel):
    """Normalized runtime LLM configuration."""

    model_config = ConfigDict(extra="forbid")

    provider: str
    api_type: APIType = LLM_API_TYPE_CHAT_COMPLETION
    model: str
    base_url: str | None = None
    temperature: float | None = None
    timeout: float | None = None
    max_retries: int = 0
    request_kwargs: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_env(cls) -> "LLMModelConfig":
        """Build the default config from environment-backed settings."""
        from pagedigest import config
        from pagedigest.constants import MOCK

        return cls(
            provider=MOCK if config.MOCK_AI_SUMMARY else config.LLM_PROVIDER,
            api_type=config.LLM_API_TYPE,
            model=config.BASE_MODEL,
            base_url=config.LLM_BASE_URL,
            temperature=config.LLM_TEMPERATURE,
            timeout=config.LLM_TIMEOUT_SECONDS,
            max_retries=config.LLM_MAX_RETRIES,
            request_kwargs=dict(config.LLM_REQUEST_KWARGS),
        )
