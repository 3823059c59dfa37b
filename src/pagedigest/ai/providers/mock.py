"""Offline provider that streams a canned summary (MOCK_AI_SUMMARY)."""

from __future__ import annotations

import asyncio
import logging
import re
from typing import AsyncIterator

from pagedigest.ai.prompt import GenerationPrompt
from pagedigest.ai.providers.base import GenerationProvider
from pagedigest.constants import MOCK

logger = logging.getLogger(__name__)

MOCK_SUMMARY = """# Page Summary 🌟
---
This is a mock summary generated without contacting the generation service.

## What the page covers 📘
{excerpt}

## Why you are seeing this 🔍
- `MOCK_AI_SUMMARY` is enabled
"""


class MockGenerationProvider(GenerationProvider):
    """Streams a fixed markdown summary in word-sized deltas."""

    def __init__(self, delay: float = 0.02, excerpt_chars: int = 160) -> None:
        self.delay = delay
        self.excerpt_chars = excerpt_chars

    @property
    def name(self) -> str:
        return MOCK

    async def stream_text(self, credential: str, prompt: GenerationPrompt) -> AsyncIterator[str]:
        excerpt = " ".join(prompt.user_content.split())[: self.excerpt_chars]
        text = MOCK_SUMMARY.format(excerpt=excerpt or "_No excerpt available._")
        logger.info("Streaming mock summary")
        for piece in re.findall(r"\S+\s*|\s+", text):
            if self.delay:
                await asyncio.sleep(self.delay)
            yield piece
