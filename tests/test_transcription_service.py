"""Tests for the transcription orchestrator."""

from __future__ import annotations

import io
from pathlib import Path
from unittest import mock

import pytest

from intake.errors import (
    InvalidInputError,
    LanguageDetectionError,
    NoSpeechDetectedError,
    ProviderError,
)
from intake.services.transcription_service import TranscriptionService


@pytest.fixture
def upload_dir(tmp_path) -> Path:
    return tmp_path / "uploads"


class TestTranscribe:
    def test_delegates_to_transcriber(self, fake_transcriber, sample_transcript, upload_dir):
        service = TranscriptionService(fake_transcriber, upload_dir)

        result = service.transcribe(io.BytesIO(b"webm-bytes"), "consultation.webm", "en")

        assert result is sample_transcript
        assert fake_transcriber.calls == [(b"webm-bytes", "en")]

    def test_upload_deleted_on_success(self, fake_transcriber, upload_dir):
        service = TranscriptionService(fake_transcriber, upload_dir)

        service.transcribe(io.BytesIO(b"audio"), "consultation.mp3")

        assert list(upload_dir.iterdir()) == []

    def test_upload_deleted_on_failure(self, fake_transcriber, upload_dir):
        fake_transcriber.error = ProviderError("AssemblyAI API error", detail="401 Unauthorized")
        service = TranscriptionService(fake_transcriber, upload_dir)

        with pytest.raises(ProviderError):
            service.transcribe(io.BytesIO(b"audio"), "consultation.webm")

        assert list(upload_dir.iterdir()) == []

    def test_keeps_extension(self, upload_dir):
        seen = []
        transcriber = mock.MagicMock()
        transcriber.name = "recording"
        transcriber.transcribe.side_effect = lambda audio, language: seen.extend(upload_dir.iterdir())
        service = TranscriptionService(transcriber, upload_dir)

        service.transcribe(io.BytesIO(b"audio"), "call.m4a")
        service.transcribe(io.BytesIO(b"audio"), None)

        assert seen[0].suffix == ".m4a"
        assert seen[1].suffix == ".webm"


class TestErrors:
    def test_provider_error_sanitized(self, fake_transcriber, upload_dir):
        fake_transcriber.error = ProviderError("Deepgram API error", detail='{"err_code":"INVALID_AUTH"}')
        service = TranscriptionService(fake_transcriber, upload_dir)

        with pytest.raises(ProviderError) as exc_info:
            service.transcribe(io.BytesIO(b"audio"), "a.webm")

        assert exc_info.value.message == "Transcription failed"
        assert exc_info.value.detail is None

    def test_unexpected_error_becomes_provider_error(self, fake_transcriber, upload_dir):
        fake_transcriber.error = KeyError("utterances")
        service = TranscriptionService(fake_transcriber, upload_dir)

        with pytest.raises(ProviderError, match="Transcription failed"):
            service.transcribe(io.BytesIO(b"audio"), "a.webm")

    def test_actionable_errors_pass_through(self, fake_transcriber, upload_dir):
        service = TranscriptionService(fake_transcriber, upload_dir)

        fake_transcriber.error = LanguageDetectionError("ru", 37)
        with pytest.raises(LanguageDetectionError):
            service.transcribe(io.BytesIO(b"audio"), "a.webm")

        fake_transcriber.error = NoSpeechDetectedError()
        with pytest.raises(NoSpeechDetectedError):
            service.transcribe(io.BytesIO(b"audio"), "a.webm")

    def test_unsupported_language(self, fake_transcriber, upload_dir):
        service = TranscriptionService(fake_transcriber, upload_dir)

        with pytest.raises(InvalidInputError):
            service.transcribe(io.BytesIO(b"audio"), "a.webm", "klingon")

        assert fake_transcriber.calls == []

    def test_empty_upload(self, fake_transcriber, upload_dir):
        service = TranscriptionService(fake_transcriber, upload_dir)

        with pytest.raises(InvalidInputError):
            service.transcribe(io.BytesIO(b""), "a.webm")

        assert fake_transcriber.calls == []
        assert list(upload_dir.iterdir()) == []

    def test_cleanup_failure_does_not_mask_error(self, fake_transcriber, upload_dir):
        fake_transcriber.error = NoSpeechDetectedError()
        service = TranscriptionService(fake_transcriber, upload_dir)

        with mock.patch.object(Path, "unlink", side_effect=PermissionError("locked")):
            with pytest.raises(NoSpeechDetectedError):
                service.transcribe(io.BytesIO(b"audio"), "a.webm")
