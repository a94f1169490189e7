"""
Evaluation scenarios: scripted insurance calls with expected outcomes.

Each scenario is a complete transcript.  Assertions cover the eligibility
gates computed at end of call; the runner also exercises the downstream
claim / quote task when the gate is expected to open.

These run against the live endpoint, so results depend on the model.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from app.domain.transcript import Speaker, TranscriptEntry

A = Speaker.AGENT
C = Speaker.CUSTOMER


def _t(*turns: tuple[Speaker, str]) -> list[TranscriptEntry]:
    return [TranscriptEntry(speaker=s, text=text) for s, text in turns]


@dataclass
class Scenario:
    name: str
    description: str
    transcript: list[TranscriptEntry]
    # Assertions on the wrap-up
    expect_claim_eligible: bool = False
    expect_quote_eligible: bool = False
    allowed_sentiments: list[str] = field(
        default_factory=lambda: ["Positive", "Negative", "Neutral", "Mixed"]
    )


SCENARIOS: list[Scenario] = [
    Scenario(
        name="accident_report",
        description=(
            "Policyholder reports a rear-end collision and gives a policy "
            "number. Claim gate should open; no quote details given."
        ),
        transcript=_t(
            (A, "Thank you for calling ABC General Insurance. My name is Alex. How can I help you today?"),
            (C, "Hi, I was in a car accident this morning. Someone rear-ended me at a red light."),
            (A, "I'm sorry to hear that. Is everyone okay? Could I get your name and policy number?"),
            (C, "Nobody was hurt. I'm Maria Lopez, policy number AG-4471902."),
            (A, "Thank you, Maria. Where did this happen, and which vehicles were involved?"),
            (C, "Corner of 5th and Main. My 2019 Honda Civic and a gray Ford F-150. The police came, report number 88231."),
        ),
        expect_claim_eligible=True,
        expect_quote_eligible=False,
        allowed_sentiments=["Negative", "Neutral", "Mixed"],
    ),
    Scenario(
        name="new_customer_quote",
        description=(
            "Prospect asks for an auto quote and gives name, date of birth "
            "and tenure. Quote gate should open; no accident."
        ),
        transcript=_t(
            (A, "Thank you for calling ABC General Insurance. My name is Alex. How can I help you today?"),
            (C, "Hi, I just bought a car and I'd like a quote for auto insurance."),
            (A, "Congratulations! May I have your full name and date of birth?"),
            (C, "Sure, it's James Carter, born March 14th, 1988."),
            (A, "Thanks, James. How long would you like the policy term to be?"),
            (C, "A one-year policy, please. It's a 2022 Toyota RAV4 and I have a clean record."),
        ),
        expect_claim_eligible=False,
        expect_quote_eligible=True,
        allowed_sentiments=["Positive", "Neutral", "Mixed"],
    ),
    Scenario(
        name="greeting_only",
        description=(
            "Only the agent's greeting. Eligibility short-circuits to false "
            "without a request."
        ),
        transcript=_t(
            (A, "Thank you for calling ABC General Insurance. My name is Alex. How can I help you today?"),
        ),
    ),
]
