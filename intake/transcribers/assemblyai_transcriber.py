"""
AssemblyAI transcriber
Uploads the recording, submits a diarized + PII-redacted job and polls until it finishes.
AssemblyAI already returns one utterance per speaker turn, so no local merge is needed.
"""
import logging
import time
from typing import List, Literal, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, Field, ValidationError, model_validator

from intake.errors import ProviderError
from intake.models.transcript import Transcript, TranscriptStatus, Utterance, Word
from intake.transcribers.base import AUTO_LANGUAGE, Transcriber
from intake.transcribers.redaction import (
    ASSEMBLYAI_REDACTION_POLICIES,
    ASSEMBLYAI_REDACTION_SUBSTITUTION,
)

logger = logging.getLogger(__name__)

SchemaT = TypeVar("SchemaT", bound=BaseModel)


# ==================== Response schemas ====================


class AssemblyAIUpload(BaseModel):
    upload_url: str


class _TimedSpan(BaseModel):
    start: int = Field(ge=0)       # ms
    end: int = Field(ge=0)         # ms

    @model_validator(mode="after")
    def _end_after_start(self):
        if self.end < self.start:
            raise ValueError(f"end ({self.end}) before start ({self.start})")
        return self


class AssemblyAIWord(_TimedSpan):
    text: str
    confidence: float = Field(ge=0, le=1)
    speaker: Optional[str] = None


class AssemblyAIUtterance(_TimedSpan):
    speaker: str
    text: str
    words: List[AssemblyAIWord]


class AssemblyAITranscript(BaseModel):
    id: str
    status: Literal["queued", "processing", "completed", "error"]
    text: Optional[str] = None
    utterances: Optional[List[AssemblyAIUtterance]] = None
    error: Optional[str] = None


# ==================== Transcriber ====================


class AssemblyAITranscriber(Transcriber):
    """
    Transcription through the AssemblyAI REST API

    Speaker diarization, the universal-2 model and PII redaction (restricted to
    banking / card / national ID data) are always enabled.
    """

    name = "assemblyai"
    SPEECH_MODEL = "universal-2"

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.assemblyai.com",
        poll_interval: float = 3.0,
        timeout: float = 300.0,
        client: Optional[httpx.Client] = None,
    ):
        """
        :param api_key: AssemblyAI API key
        :param base_url: API root
        :param poll_interval: seconds between status polls
        :param timeout: request timeout (seconds)
        :param client: preconfigured httpx client, mainly for tests
        """
        self.poll_interval = poll_interval
        self.client = client or httpx.Client(
            base_url=base_url.rstrip("/"),
            headers={"authorization": api_key},
            timeout=timeout,
        )
        logger.info(f"[AssemblyAI] Initialized: base_url={base_url}, model={self.SPEECH_MODEL}")

    def build_request(self, upload_url: str, language: str) -> dict:
        """Transcript job payload for an uploaded file"""
        payload = {
            "audio_url": upload_url,
            "speaker_labels": True,
            "speech_models": [self.SPEECH_MODEL],
            "redact_pii": True,
            "redact_pii_policies": list(ASSEMBLYAI_REDACTION_POLICIES),
            "redact_pii_sub": ASSEMBLYAI_REDACTION_SUBSTITUTION,
        }
        if language == AUTO_LANGUAGE:
            payload["language_detection"] = True
        else:
            payload["language_code"] = language
        return payload

    def transcribe(self, audio: bytes, language: str = AUTO_LANGUAGE) -> Transcript:
        logger.info(f"[AssemblyAI] Uploading audio: {len(audio) / 1024:.1f} KB, language={language}")

        upload = self._parse(
            AssemblyAIUpload,
            self._request(
                "POST",
                "/v2/upload",
                content=audio,
                headers={"content-type": "application/octet-stream"},
            ),
        )

        job = self._parse(
            AssemblyAITranscript,
            self._request("POST", "/v2/transcript", json=self.build_request(upload.upload_url, language)),
        )
        logger.info(f"[AssemblyAI] Job submitted: id={job.id}")

        while job.status in ("queued", "processing"):
            time.sleep(self.poll_interval)
            job = self._parse(AssemblyAITranscript, self._request("GET", f"/v2/transcript/{job.id}"))

        if job.status == "error":
            logger.error(f"[AssemblyAI] Job failed: id={job.id}, error={job.error}")
            raise ProviderError("AssemblyAI transcription failed", detail=job.error)

        transcript = self._to_transcript(job)
        logger.info(
            f"[AssemblyAI] Transcription complete: id={job.id}, "
            f"utterances={len(transcript.utterances or ())}, chars={len(transcript.text)}"
        )
        return transcript

    # ==================== Helpers ====================

    @staticmethod
    def _to_transcript(job: AssemblyAITranscript) -> Transcript:
        utterances = None
        if job.utterances is not None:
            utterances = tuple(
                Utterance(
                    speaker=u.speaker,
                    text=u.text,
                    start_ms=u.start,
                    end_ms=u.end,
                    words=tuple(
                        Word(
                            text=w.text,
                            start_ms=w.start,
                            end_ms=w.end,
                            confidence=w.confidence,
                            speaker=w.speaker or u.speaker,
                        )
                        for w in u.words
                    ),
                )
                for u in job.utterances
            )

        return Transcript(
            id=job.id,
            status=TranscriptStatus.completed,
            text=job.text or "",
            utterances=utterances,
        )

    def _request(self, method: str, url: str, **kwargs) -> dict:
        try:
            response = self.client.request(method, url, **kwargs)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"[AssemblyAI] API request failed: {e}")
            raise ProviderError("AssemblyAI API error", detail=e.response.text) from e
        except httpx.RequestError as e:
            logger.error(f"[AssemblyAI] Connection failed: {e}")
            raise ProviderError("Cannot reach AssemblyAI", detail=str(e)) from e
        except ValueError as e:
            raise ProviderError("AssemblyAI returned invalid JSON", detail=str(e)) from e

    @staticmethod
    def _parse(schema: Type[SchemaT], data: dict) -> SchemaT:
        try:
            return schema.model_validate(data)
        except ValidationError as e:
            raise ProviderError("Unexpected AssemblyAI response", detail=str(e)) from e
