"""Tests for GeminiClient with a mocked AsyncOpenAI."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from app.core.errors import ConfigurationError, LlmRequestError
from app.core.settings import Settings
from app.infra.providers.contracts import ClaimEligibilityContract
from app.infra.providers.gemini import GeminiClient, GenerationConfig
from app.tasks.claims import CLAIM_ELIGIBILITY_SCHEMA
from fakes import mock_completion


class TestConstruction:
    def test_missing_api_key_is_fatal(self) -> None:
        with pytest.raises(ConfigurationError):
            GeminiClient(api_key="", model="gemini-2.5-flash")

    def test_from_settings_missing_key(self) -> None:
        with pytest.raises(ConfigurationError):
            GeminiClient.from_settings(Settings(api_key=""))

    def test_sdk_retries_disabled(self) -> None:
        client = GeminiClient.from_settings(Settings(api_key="k"))
        assert client._client.max_retries == 0
        assert client.model == "gemini-2.5-flash"


class TestGenerate:
    @pytest.mark.asyncio
    async def test_prompt_only(self, client, sdk) -> None:
        sdk.chat.completions.create.return_value = mock_completion("  hello  ")

        result = await client.generate("test prompt")

        assert result == "hello"
        kwargs = sdk.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "test-model"
        assert kwargs["messages"] == [{"role": "user", "content": "test prompt"}]
        assert "response_format" not in kwargs
        assert "temperature" not in kwargs

    @pytest.mark.asyncio
    async def test_system_instruction_goes_first(self, client, sdk) -> None:
        sdk.chat.completions.create.return_value = mock_completion("ok")

        await client.generate("question", system_instruction="You are an agent.")

        messages = sdk.chat.completions.create.call_args.kwargs["messages"]
        assert messages[0] == {"role": "system", "content": "You are an agent."}
        assert messages[1] == {"role": "user", "content": "question"}

    @pytest.mark.asyncio
    async def test_generation_config_mapping(self, client, sdk) -> None:
        sdk.chat.completions.create.return_value = mock_completion("ok")
        config = GenerationConfig(
            temperature=0.8,
            top_p=0.95,
            top_k=40,
            max_output_tokens=150,
            disable_thinking=True,
        )

        await client.generate("p", config=config)

        kwargs = sdk.chat.completions.create.call_args.kwargs
        assert kwargs["temperature"] == 0.8
        assert kwargs["top_p"] == 0.95
        assert kwargs["max_tokens"] == 150
        assert kwargs["reasoning_effort"] == "none"
        assert kwargs["extra_body"] == {"top_k": 40}

    @pytest.mark.asyncio
    async def test_exactly_one_request_on_failure(self, client, sdk) -> None:
        sdk.chat.completions.create.side_effect = ConnectionError("network down")

        with pytest.raises(LlmRequestError, match="network down"):
            await client.generate("p")

        assert sdk.chat.completions.create.await_count == 1

    @pytest.mark.asyncio
    async def test_empty_content_raises(self, client, sdk) -> None:
        sdk.chat.completions.create.return_value = mock_completion("   ")
        with pytest.raises(LlmRequestError):
            await client.generate("p")

    @pytest.mark.asyncio
    async def test_no_choices_raises(self, client, sdk) -> None:
        response = mock_completion("x")
        response.choices = []
        sdk.chat.completions.create.return_value = response
        with pytest.raises(LlmRequestError):
            await client.generate("p")


class TestGenerateStructured:
    @pytest.mark.asyncio
    async def test_sends_schema_and_decodes(self, client, sdk) -> None:
        sdk.chat.completions.create.return_value = mock_completion(
            {"is_accident": True, "has_policy_number": True}
        )

        result = await client.generate_structured(
            "p", ClaimEligibilityContract, CLAIM_ELIGIBILITY_SCHEMA
        )

        assert result.ok
        assert result.value.is_accident is True
        kwargs = sdk.chat.completions.create.call_args.kwargs
        assert kwargs["response_format"] == CLAIM_ELIGIBILITY_SCHEMA.response_format()

    @pytest.mark.asyncio
    async def test_decode_failure_is_returned(self, client, sdk) -> None:
        sdk.chat.completions.create.return_value = mock_completion("Sorry, I can't do that.")

        result = await client.generate_structured(
            "p", ClaimEligibilityContract, CLAIM_ELIGIBILITY_SCHEMA
        )

        assert not result.ok

    @pytest.mark.asyncio
    async def test_transport_failure_raises(self, client, sdk) -> None:
        sdk.chat.completions.create = AsyncMock(side_effect=TimeoutError("slow"))
        with pytest.raises(LlmRequestError):
            await client.generate_structured(
                "p", ClaimEligibilityContract, CLAIM_ELIGIBILITY_SCHEMA
            )
