"""
Agent reply: free-text continuation of the call as the agent.

Always callable.  On failure the caller gets an apologetic line instead of
an error so the conversation can keep going.
"""

from __future__ import annotations

from app.core.errors import AssistError
from app.core.logging import logger
from app.domain.transcript import Transcript, format_transcript
from app.infra.providers.gemini import GeminiClient, GenerationConfig
from app.tasks.common import COMPANY_NAME

AGENT_SYSTEM = f"""\
You are a helpful and friendly call center agent for a fictional company called \
'{COMPANY_NAME}'. The customer is having an issue or has a question. Continue the \
conversation naturally. Keep your response concise, professional, and empathetic. \
Do not repeat what the customer just said. Reply with the agent's next line only, \
without a speaker label."""

AGENT_CONFIG = GenerationConfig(
    temperature=0.8,
    top_p=0.95,
    top_k=40,
    max_output_tokens=150,
    disable_thinking=True,
)

FALLBACK_REPLY = (
    "I'm having trouble connecting to my systems right now. "
    "Could you please repeat that?"
)


async def generate_agent_reply(
    client: GeminiClient,
    transcript: Transcript,
    *,
    call_id: str = "",
) -> str:
    prompt = f"Current Conversation:\n{format_transcript(transcript)}\n\nAgent:"
    try:
        text = await client.generate(
            prompt, system_instruction=AGENT_SYSTEM, config=AGENT_CONFIG
        )
    except AssistError as e:
        logger.warning("Call %s: agent reply failed (%s), using fallback", call_id, e)
        return FALLBACK_REPLY

    # Models sometimes echo the label we ended the prompt with.
    if text.startswith("Agent:"):
        text = text[len("Agent:"):].strip()
    return text or FALLBACK_REPLY
