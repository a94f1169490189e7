"""
Gemini provider: single-shot requests through the OpenAI-compatible API.

GeminiClient is the one place that talks to the endpoint.  It is built once
at startup (see main.py) and handed to every task explicitly; there is no
module-level client.

Each call makes exactly one request.  SDK retries are disabled and no
timeout is layered on top.  Failures surface as LlmRequestError; decoding
problems come back inside a DecodeResult for the task to judge.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from openai import AsyncOpenAI

from app.core.errors import ConfigurationError, LlmRequestError
from app.core.logging import logger
from app.core.settings import Settings
from app.domain.schema import ResponseSchema
from app.infra.providers.contracts import DecodeResult, M, decode


@dataclass(frozen=True)
class GenerationConfig:
    """Sampling parameters.  ``None`` leaves the endpoint default in place."""
    temperature: float | None = None
    top_p: float | None = None
    top_k: int | None = None
    max_output_tokens: int | None = None
    disable_thinking: bool = False

    def to_request_kwargs(self) -> dict[str, Any]:
        kwargs: dict[str, Any] = {}
        if self.temperature is not None:
            kwargs["temperature"] = self.temperature
        if self.top_p is not None:
            kwargs["top_p"] = self.top_p
        if self.max_output_tokens is not None:
            kwargs["max_tokens"] = self.max_output_tokens
        if self.disable_thinking:
            kwargs["reasoning_effort"] = "none"
        if self.top_k is not None:
            # Not part of the OpenAI schema; passed through to the backend.
            kwargs["extra_body"] = {"top_k": self.top_k}
        return kwargs


DEFAULT_CONFIG = GenerationConfig()


class GeminiClient:
    """Thin async wrapper around Gemini's OpenAI-compatible chat API."""

    def __init__(
        self,
        *,
        api_key: str,
        model: str,
        base_url: str | None = None,
        openai_client: AsyncOpenAI | None = None,
    ) -> None:
        if not api_key:
            raise ConfigurationError("API_KEY environment variable not set")
        self.model = model
        self._client = openai_client or AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            max_retries=0,
        )

    @classmethod
    def from_settings(cls, cfg: Settings) -> "GeminiClient":
        return cls(api_key=cfg.api_key, model=cfg.llm_model, base_url=cfg.llm_base_url)

    async def generate(
        self,
        prompt: str,
        *,
        system_instruction: str | None = None,
        config: GenerationConfig = DEFAULT_CONFIG,
        schema: ResponseSchema | None = None,
    ) -> str:
        """Send one request and return the trimmed response text.

        With a schema the endpoint is asked for JSON matching it; the text
        is still returned raw.  Raises LlmRequestError on any failure.
        """
        messages: list[dict[str, str]] = []
        if system_instruction:
            messages.append({"role": "system", "content": system_instruction})
        messages.append({"role": "user", "content": prompt})

        request: dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            **config.to_request_kwargs(),
        }
        if schema is not None:
            request["response_format"] = schema.response_format()

        try:
            resp = await self._client.chat.completions.create(**request)
            content = resp.choices[0].message.content
        except Exception as exc:
            raise LlmRequestError(f"{type(exc).__name__}: {exc}") from exc

        if not content or not content.strip():
            raise LlmRequestError("Empty content from endpoint")

        logger.debug(
            "LLM response (%s): %s",
            schema.name if schema else "text",
            content[:500],
        )
        return content.strip()

    async def generate_structured(
        self,
        prompt: str,
        contract: type[M],
        schema: ResponseSchema,
        *,
        system_instruction: str | None = None,
        config: GenerationConfig = DEFAULT_CONFIG,
    ) -> DecodeResult[M]:
        """Schema-constrained request decoded against ``contract``.

        Transport failures raise; decode failures are returned.
        """
        text = await self.generate(
            prompt,
            system_instruction=system_instruction,
            config=config,
            schema=schema,
        )
        return decode(contract, text)
