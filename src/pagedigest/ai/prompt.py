"""Summarization prompt template."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pagedigest.constants import (
    CONTENT_PLACEHOLDER,
    DEFAULT_SUMMARY_INSTRUCTIONS,
    DEFAULT_USER_TEMPLATE,
)
from pagedigest.types.content import ExtractedContent


class GenerationPrompt(BaseModel):
    """Request payload for the generation service."""

    model_config = ConfigDict(frozen=True)

    instructions: str
    user_content: str


class PromptTemplate(BaseModel):
    """
    Static instructions plus a user-content template with a ``{content}`` slot.

    ``max_body_chars`` caps the page body before interpolation to bound the
    request size; ``None`` or ``0`` sends the full body.
    """

    model_config = ConfigDict(frozen=True)

    template: str = DEFAULT_USER_TEMPLATE
    instructions: str = DEFAULT_SUMMARY_INSTRUCTIONS
    max_body_chars: int | None = Field(default=None, ge=0)

    @field_validator("template")
    @classmethod
    def _require_placeholder(cls, value: str) -> str:
        if CONTENT_PLACEHOLDER not in value:
            raise ValueError(f"template must contain the {CONTENT_PLACEHOLDER} placeholder")
        return value

    @classmethod
    def from_env(cls, **overrides) -> "PromptTemplate":
        from pagedigest.config import PROMPT_MAX_BODY_CHARS

        overrides.setdefault("max_body_chars", PROMPT_MAX_BODY_CHARS or None)
        return cls(**overrides)

    def render(self, content: ExtractedContent) -> GenerationPrompt:
        text = content.as_text(max_body_chars=self.max_body_chars or None)
        return GenerationPrompt(
            instructions=self.instructions,
            user_content=self.template.replace(CONTENT_PLACEHOLDER, text),
        )


__all__ = ["GenerationPrompt", "PromptTemplate"]
