"""Shared fixtures for agent-assist tests."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from app.domain.transcript import Speaker, TranscriptEntry
from app.infra.providers.gemini import GeminiClient
from app.infra.session_store import clear_calls
from fakes import mock_openai


@pytest.fixture(autouse=True)
def _empty_call_store():
    clear_calls()
    yield
    clear_calls()


@pytest.fixture
def sdk() -> MagicMock:
    """Mock AsyncOpenAI; set ``sdk.chat.completions.create`` per test."""
    return mock_openai(AsyncMock())


@pytest.fixture
def client(sdk: MagicMock) -> GeminiClient:
    return GeminiClient(api_key="test-key", model="test-model", openai_client=sdk)


@pytest.fixture
def accident_transcript() -> list[TranscriptEntry]:
    """5-entry accident-report call."""
    return [
        TranscriptEntry(Speaker.AGENT, "Thank you for calling ABC General Insurance. How can I help?"),
        TranscriptEntry(Speaker.CUSTOMER, "I was rear-ended on the highway this morning."),
        TranscriptEntry(Speaker.AGENT, "I'm sorry to hear that. Can I get your policy number?"),
        TranscriptEntry(Speaker.CUSTOMER, "Sure, it's AG-4471902. I'm Maria Lopez."),
        TranscriptEntry(Speaker.AGENT, "Thanks Maria. Was anyone injured?"),
    ]
