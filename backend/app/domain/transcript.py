"""
Transcript model and prompt formatting.

A transcript is the ordered list of utterances for one call, oldest first.
Entries are frozen; callers build a new list (or append) rather than edit
an entry in place.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Sequence


class Speaker(Enum):
    CUSTOMER = "Customer"
    AGENT = "Agent"


@dataclass(frozen=True)
class TranscriptEntry:
    speaker: Speaker
    text: str

    def to_dict(self) -> dict[str, Any]:
        return {"speaker": self.speaker.value, "text": self.text}


Transcript = Sequence[TranscriptEntry]


def format_transcript(transcript: Iterable[TranscriptEntry]) -> str:
    """One ``"<speaker>: <text>"`` line per entry, in conversation order."""
    return "\n".join(f"{entry.speaker.value}: {entry.text}" for entry in transcript)
