"""OpenAI chat completions streaming provider."""

from __future__ import annotations

import logging
from typing import AsyncIterator, Callable

import httpx
import openai
from openai import AsyncOpenAI
from openinference.semconv.trace import OpenInferenceSpanKindValues, SpanAttributes
from opentelemetry.trace import Status, StatusCode

from pagedigest.ai.prompt import GenerationPrompt
from pagedigest.ai.providers.base import GenerationProvider
from pagedigest.constants import OPENAI, OPENAI_CHAT_COMPLETIONS_ALLOWED_REQUEST_KWARGS
from pagedigest.exceptions import AuthError, TransportError, UpstreamError
from pagedigest.tracing import get_trace_context
from pagedigest.tracing.runtime import _get_tracer
from pagedigest.types.llm import LLMModelConfig

logger = logging.getLogger(__name__)

ClientFactory = Callable[[str], AsyncOpenAI]


class OpenAIChatCompletionAPI(GenerationProvider):
    """Streams a summary from the chat completions endpoint.

    A fresh client is created per exchange so every stream is cold and
    authenticated with the credential current at call time.
    """

    def __init__(
        self,
        llm_config: LLMModelConfig,
        client_factory: ClientFactory | None = None,
    ) -> None:
        self.llm_config = llm_config
        self._client_factory = client_factory or self._default_client

    @property
    def name(self) -> str:
        return OPENAI

    def _default_client(self, credential: str) -> AsyncOpenAI:
        return AsyncOpenAI(
            api_key=credential,
            base_url=self.llm_config.base_url,
            timeout=self.llm_config.timeout,
            max_retries=self.llm_config.max_retries,
        )

    def build_request(self, prompt: GenerationPrompt) -> dict:
        request: dict = {
            "model": self.llm_config.model,
            "messages": [
                {"role": "system", "content": prompt.instructions},
                {"role": "user", "content": prompt.user_content},
            ],
            "stream": True,
        }
        if self.llm_config.temperature is not None:
            request["temperature"] = self.llm_config.temperature

        for key, value in self.llm_config.request_kwargs.items():
            if key not in OPENAI_CHAT_COMPLETIONS_ALLOWED_REQUEST_KWARGS:
                logger.warning(f"Ignoring unsupported chat completions request kwarg '{key}'")
                continue
            request[key] = value
        return request

    async def stream_text(self, credential: str, prompt: GenerationPrompt) -> AsyncIterator[str]:
        tracer = _get_tracer(__name__)
        ctx = get_trace_context()
        span = tracer.start_span(f"{self.__class__.__name__}.stream_text")
        span.set_attribute(SpanAttributes.OPENINFERENCE_SPAN_KIND, OpenInferenceSpanKindValues.LLM.value)
        span.set_attribute(SpanAttributes.LLM_MODEL_NAME, self.llm_config.model)
        if ctx.get("operation_id"):
            span.set_attribute("operation_id", ctx["operation_id"])

        delta_count = 0
        try:
            async with self._client_factory(credential) as client:
                stream = await client.chat.completions.create(**self.build_request(prompt))
                async with stream:
                    async for chunk in stream:
                        for choice in chunk.choices:
                            content = choice.delta.content if choice.delta else None
                            if content:
                                delta_count += 1
                                yield content
            span.set_status(Status(StatusCode.OK))
        except (openai.AuthenticationError, openai.PermissionDeniedError) as exc:
            span.set_status(Status(StatusCode.ERROR, "authentication failed"))
            raise AuthError(
                "The API key provided seems to be incorrect",
                details=str(exc),
            ) from exc
        except openai.APIConnectionError as exc:
            span.set_status(Status(StatusCode.ERROR, "connection failed"))
            raise TransportError(
                "Could not reach the generation service",
                details=str(exc),
            ) from exc
        except httpx.TransportError as exc:
            span.set_status(Status(StatusCode.ERROR, "stream interrupted"))
            raise TransportError(
                "The connection to the generation service was interrupted",
                details=f"{type(exc).__name__}: {exc}",
            ) from exc
        except openai.APIError as exc:
            span.set_status(Status(StatusCode.ERROR, "service error"))
            status_code = getattr(exc, "status_code", None)
            raise UpstreamError(
                "The generation service reported an error",
                details=str(exc),
                reason=f"http_{status_code}" if status_code else "api_error",
            ) from exc
        finally:
            span.set_attribute("llm.stream.delta_count", delta_count)
            span.end()
