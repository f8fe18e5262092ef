"""
Deepgram transcriber
Sends the recording to Deepgram's pre-recorded /v1/listen endpoint.

Deepgram reports many short, speaker-fragmented segments with offsets in
seconds. They are converted to milliseconds and merged into speaker turns.
"""
import logging
import math
from typing import List, Optional

import httpx
from pydantic import BaseModel, Field, ValidationError, model_validator

from intake.errors import LanguageDetectionError, NoSpeechDetectedError, ProviderError
from intake.models.transcript import (
    Transcript,
    TranscriptStatus,
    Utterance,
    Word,
    separator_for,
    speaker_label,
)
from intake.transcribers.base import AUTO_LANGUAGE, Transcriber
from intake.transcribers.merger import merge_utterances
from intake.transcribers.redaction import DEEPGRAM_REDACTION_ENTITIES

logger = logging.getLogger(__name__)

# Languages covered by the higher-accuracy model
NOVA3_LANGUAGES = frozenset({"en", "es", "fr", "de", "hi", "ru", "pt", "ja", "it", "nl"})
NOVA3_MODEL = "nova-3"
LEGACY_MODEL = "nova-2"


def seconds_to_ms(seconds: float) -> int:
    """Provider seconds -> integer milliseconds (floored)"""
    return math.floor(seconds * 1000)


def select_model(language: str) -> str:
    """nova-3 for languages it supports, otherwise the broad-coverage nova-2"""
    if language == AUTO_LANGUAGE or language not in NOVA3_LANGUAGES:
        return LEGACY_MODEL
    return NOVA3_MODEL


# ==================== Response schemas ====================


class _TimedSpan(BaseModel):
    start: float = Field(ge=0)     # seconds
    end: float = Field(ge=0)       # seconds

    @model_validator(mode="after")
    def _end_after_start(self):
        if self.end < self.start:
            raise ValueError(f"end ({self.end}) before start ({self.start})")
        return self


class DeepgramWord(_TimedSpan):
    word: str
    confidence: float = Field(ge=0, le=1)
    speaker: int = Field(ge=0)
    punctuated_word: Optional[str] = None


class DeepgramAlternative(BaseModel):
    transcript: str
    words: List[DeepgramWord]


class DeepgramChannel(BaseModel):
    alternatives: List[DeepgramAlternative] = Field(min_length=1)
    detected_language: Optional[str] = None
    language_confidence: Optional[float] = None


class DeepgramUtterance(_TimedSpan):
    transcript: str
    speaker: int = Field(ge=0)
    words: List[DeepgramWord]


class DeepgramResults(BaseModel):
    channels: List[DeepgramChannel] = Field(min_length=1)
    utterances: List[DeepgramUtterance]


class DeepgramMetadata(BaseModel):
    request_id: str


class DeepgramResponse(BaseModel):
    metadata: DeepgramMetadata
    results: DeepgramResults


# ==================== Transcriber ====================


class DeepgramTranscriber(Transcriber):
    """
    Transcription through the Deepgram REST API

    Diarization, punctuation and PII redaction are always requested.
    """

    name = "deepgram"

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.deepgram.com",
        timeout: float = 300.0,
        client: Optional[httpx.Client] = None,
    ):
        self.client = client or httpx.Client(
            base_url=base_url.rstrip("/"),
            headers={"Authorization": f"Token {api_key}"},
            timeout=timeout,
        )
        logger.info(f"[Deepgram] Initialized: base_url={base_url}")

    @staticmethod
    def build_params(language: str) -> list[tuple[str, str]]:
        """Query parameters for /v1/listen"""
        params = [
            ("model", select_model(language)),
            ("diarize", "true"),
            ("punctuate", "true"),
            ("smart_format", "true"),
            ("utterances", "true"),
        ]
        params.extend(("redact", entity) for entity in DEEPGRAM_REDACTION_ENTITIES)
        if language == AUTO_LANGUAGE:
            params.append(("detect_language", "true"))
        else:
            params.append(("language", language))
        return params

    def transcribe(self, audio: bytes, language: str = AUTO_LANGUAGE) -> Transcript:
        params = self.build_params(language)
        logger.info(
            f"[Deepgram] Transcribing: {len(audio) / 1024:.1f} KB, "
            f"language={language}, model={select_model(language)}"
        )

        response = self._parse(self._request(audio, params))
        channel = response.results.channels[0]
        top = channel.alternatives[0]

        if not top.transcript.strip():
            self._raise_for_empty(response, channel, language)

        spoken = channel.detected_language if language == AUTO_LANGUAGE else language
        separator = separator_for(spoken)
        segments = [self._to_utterance(u, separator) for u in response.results.utterances]
        utterances = merge_utterances(segments, separator)

        logger.info(
            f"[Deepgram] Transcription complete: request_id={response.metadata.request_id}, "
            f"segments={len(segments)}, turns={len(utterances)}, language={spoken}"
        )
        return Transcript(
            id=response.metadata.request_id,
            status=TranscriptStatus.completed,
            text=top.transcript,
            utterances=tuple(utterances),
        )

    # ==================== Helpers ====================

    @staticmethod
    def _raise_for_empty(response: DeepgramResponse, channel: DeepgramChannel, language: str) -> None:
        total_words = sum(
            len(alt.words) for ch in response.results.channels for alt in ch.alternatives
        ) + sum(len(u.words) for u in response.results.utterances)

        if total_words == 0:
            logger.warning(f"[Deepgram] No speech detected: request_id={response.metadata.request_id}")
            raise NoSpeechDetectedError()

        if language == AUTO_LANGUAGE:
            detected = channel.detected_language or "unknown"
            confidence = round((channel.language_confidence or 0.0) * 100)
            logger.warning(
                f"[Deepgram] Empty transcript after language detection: "
                f"detected={detected}, confidence={confidence}%"
            )
            raise LanguageDetectionError(detected, confidence)

    @staticmethod
    def _to_word(word: DeepgramWord) -> Word:
        return Word(
            text=word.punctuated_word or word.word,
            start_ms=seconds_to_ms(word.start),
            end_ms=seconds_to_ms(word.end),
            confidence=word.confidence,
            speaker=speaker_label(word.speaker),
        )

    def _to_utterance(self, segment: DeepgramUtterance, separator: str) -> Utterance:
        label = speaker_label(segment.speaker)
        words = [self._to_word(w) for w in segment.words]
        if words:
            return Utterance.from_words(label, words, separator=separator)
        return Utterance(
            speaker=label,
            text=segment.transcript,
            start_ms=seconds_to_ms(segment.start),
            end_ms=seconds_to_ms(segment.end),
        )

    def _request(self, audio: bytes, params: list[tuple[str, str]]) -> dict:
        try:
            response = self.client.post(
                "/v1/listen",
                params=params,
                content=audio,
                headers={"Content-Type": "audio/*"},
            )
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"[Deepgram] API request failed: {e}")
            raise ProviderError("Deepgram API error", detail=e.response.text) from e
        except httpx.RequestError as e:
            logger.error(f"[Deepgram] Connection failed: {e}")
            raise ProviderError("Cannot reach Deepgram", detail=str(e)) from e
        except ValueError as e:
            raise ProviderError("Deepgram returned invalid JSON", detail=str(e)) from e

    @staticmethod
    def _parse(data: dict) -> DeepgramResponse:
        try:
            return DeepgramResponse.model_validate(data)
        except ValidationError as e:
            raise ProviderError("Unexpected Deepgram response", detail=str(e)) from e
