"""
Consultation API routes

  1. GET  /api/health       — liveness probe
  2. GET  /api/languages    — language codes accepted by /api/transcribe
  3. POST /api/transcribe   — multipart audio → diarized, redacted transcript
  4. POST /api/summarize    — transcript text → Markdown legal summary
"""
import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, File, Form, Request, UploadFile

from intake.errors import InvalidInputError
from intake.models.api import (
    ErrorResponse,
    HealthResponse,
    LanguagesResponse,
    SummarizeRequest,
    SummarizeResponse,
    TranscribeResponse,
)
from intake.services.summary_service import SummaryService
from intake.services.transcription_service import SUPPORTED_LANGUAGES, TranscriptionService
from intake.transcribers.base import AUTO_LANGUAGE

logger = logging.getLogger(__name__)
router = APIRouter(tags=["consultation"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


@router.get("/health", summary="Health check", response_model=HealthResponse)
def health():
    timestamp = datetime.now(timezone.utc).isoformat(timespec="milliseconds")
    return HealthResponse(status="ok", timestamp=timestamp.replace("+00:00", "Z"))


@router.get("/languages", summary="Supported languages", response_model=LanguagesResponse)
def languages():
    return LanguagesResponse(languages=list(SUPPORTED_LANGUAGES))


@router.post(
    "/transcribe",
    summary="Transcribe a consultation recording",
    response_model=TranscribeResponse,
    responses=ERROR_RESPONSES,
)
def transcribe(
    request: Request,
    audio: Optional[UploadFile] = File(None),
    language: str = Form(AUTO_LANGUAGE),
):
    """
    Upload an audio recording and receive a speaker-separated transcript

    PII is redacted by the transcription provider; the upload is deleted as
    soon as the request finishes.
    """
    if audio is None:
        raise InvalidInputError("No audio file provided")

    service: TranscriptionService = request.app.state.transcription_service
    transcript = service.transcribe(audio.file, filename=audio.filename, language=language)
    logger.info(f"[API] Transcribed: id={transcript.id}")
    return TranscribeResponse(transcript=transcript)


@router.post(
    "/summarize",
    summary="Summarize a consultation transcript",
    response_model=SummarizeResponse,
    responses=ERROR_RESPONSES,
)
def summarize(req: SummarizeRequest, request: Request):
    """Generate a structured Markdown summary for the law firm"""
    service: SummaryService = request.app.state.summary_service
    summary = service.summarize(req.text or "")
    return SummarizeResponse(summary=summary)
