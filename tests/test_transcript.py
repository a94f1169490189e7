from __future__ import annotations

import pytest

from app.domain.transcript import Speaker, TranscriptEntry, format_transcript


class TestFormatTranscript:
    def test_empty_transcript_is_empty_string(self) -> None:
        assert format_transcript([]) == ""

    def test_one_line_per_entry_in_order(self, accident_transcript) -> None:
        text = format_transcript(accident_transcript)
        lines = text.split("\n")

        assert len(lines) == len(accident_transcript)
        for line, entry in zip(lines, accident_transcript):
            assert line == f"{entry.speaker.value}: {entry.text}"

    def test_no_escaping_or_truncation(self) -> None:
        long_text = "x" * 5000 + ' "quoted" <tag> & more'
        entries = [TranscriptEntry(Speaker.CUSTOMER, long_text)]
        assert format_transcript(entries) == f"Customer: {long_text}"

    def test_accepts_any_iterable(self) -> None:
        entries = (
            TranscriptEntry(Speaker.AGENT, "Hi"),
            TranscriptEntry(Speaker.CUSTOMER, "Hello"),
        )
        assert format_transcript(iter(entries)) == "Agent: Hi\nCustomer: Hello"


class TestTranscriptEntry:
    def test_to_dict_uses_speaker_label(self) -> None:
        entry = TranscriptEntry(Speaker.CUSTOMER, "My car was hit")
        assert entry.to_dict() == {"speaker": "Customer", "text": "My car was hit"}

    def test_is_immutable(self) -> None:
        entry = TranscriptEntry(Speaker.AGENT, "Hi")
        with pytest.raises(AttributeError):
            entry.text = "changed"  # type: ignore[misc]
