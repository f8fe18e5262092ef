"""Shared fixtures for intake tests."""

from __future__ import annotations

from typing import Optional

import pytest

from intake.llm.base import LLMSummarizer
from intake.models.transcript import Transcript, TranscriptStatus, Utterance, Word
from intake.transcribers.base import Transcriber


class FakeTranscriber(Transcriber):
    """Returns a canned transcript (or raises) and records every call."""

    name = "fake"

    def __init__(self, result: Optional[Transcript] = None, error: Optional[Exception] = None):
        self.result = result
        self.error = error
        self.calls: list[tuple[bytes, str]] = []

    def transcribe(self, audio: bytes, language: str = "auto") -> Transcript:
        self.calls.append((audio, language))
        if self.error is not None:
            raise self.error
        return self.result


class FakeLLM(LLMSummarizer):
    """Returns a canned summary (or raises) and records every call."""

    def __init__(self, response: str = "## Summary", error: Optional[Exception] = None):
        self.response = response
        self.error = error
        self.calls: list[str] = []

    def summarize(self, transcript_text: str) -> str:
        self.calls.append(transcript_text)
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def sample_transcript() -> Transcript:
    """A two-speaker consultation transcript."""
    hello = Word(text="Hello.", start_ms=0, end_ms=500, confidence=0.99, speaker="A")
    hi = Word(text="Hi.", start_ms=700, end_ms=900, confidence=0.97, speaker="B")
    return Transcript(
        id="tx-1",
        status=TranscriptStatus.completed,
        text="Hello. Hi.",
        utterances=(
            Utterance.from_words("A", [hello]),
            Utterance.from_words("B", [hi]),
        ),
    )


def dg_word(
    word: str,
    start: float,
    end: float,
    speaker: int = 0,
    punctuated: Optional[str] = None,
    confidence: float = 0.98,
) -> dict:
    data = {"word": word, "start": start, "end": end, "confidence": confidence, "speaker": speaker}
    if punctuated is not None:
        data["punctuated_word"] = punctuated
    return data


def dg_segment(speaker: int, transcript: str, words: list[dict]) -> dict:
    return {
        "start": words[0]["start"] if words else 0.0,
        "end": words[-1]["end"] if words else 0.0,
        "confidence": 0.95,
        "channel": 0,
        "transcript": transcript,
        "speaker": speaker,
        "words": words,
    }


def dg_payload(
    segments: list[dict],
    transcript: Optional[str] = None,
    detected_language: Optional[str] = None,
    language_confidence: Optional[float] = None,
    request_id: str = "req-1",
) -> dict:
    """A /v1/listen response body built from raw Deepgram segments."""
    words = [w for seg in segments for w in seg["words"]]
    if transcript is None:
        transcript = " ".join(seg["transcript"].strip() for seg in segments)
    channel: dict = {"alternatives": [{"transcript": transcript, "confidence": 0.95, "words": words}]}
    if detected_language is not None:
        channel["detected_language"] = detected_language
        channel["language_confidence"] = language_confidence
    return {
        "metadata": {"request_id": request_id, "duration": 3.0, "channels": 1},
        "results": {"channels": [channel], "utterances": segments},
    }


@pytest.fixture
def deepgram_payload():
    """Factory fixture for Deepgram response bodies."""
    return dg_payload


@pytest.fixture
def deepgram_segment():
    return dg_segment


@pytest.fixture
def deepgram_word():
    return dg_word


@pytest.fixture
def fake_transcriber(sample_transcript) -> FakeTranscriber:
    return FakeTranscriber(result=sample_transcript)


@pytest.fixture
def fake_llm() -> FakeLLM:
    return FakeLLM()
