"""
MeritX Intake - legal consultation transcription and summary service
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from intake.errors import IntakeError

if TYPE_CHECKING:
    from intake.config import Settings
    from intake.services.summary_service import SummaryService
    from intake.services.transcription_service import TranscriptionService

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    transcription_service: Optional[TranscriptionService] = None,
    summary_service: Optional[SummaryService] = None,
) -> FastAPI:
    """
    Build the FastAPI application

    Services that are not injected are built from the settings, which must
    then be valid (ConfigError otherwise).
    """
    from intake.routers import consultation

    if settings is None:
        from intake.config import settings

    if transcription_service is None or summary_service is None:
        settings.validate()

    if transcription_service is None:
        from intake.services.transcription_service import TranscriptionService
        from intake.transcribers import create_transcriber

        transcription_service = TranscriptionService(
            transcriber=create_transcriber(settings),
            upload_dir=settings.upload_dir,
        )

    if summary_service is None:
        from intake.llm.openai_llm import OpenAILLM
        from intake.services.summary_service import SummaryService

        summary_service = SummaryService(
            OpenAILLM(
                api_key=settings.llm_api_key,
                base_url=settings.llm_base_url,
                model=settings.llm_model,
            )
        )

    app = FastAPI(
        title="MeritX Intake",
        description="Legal consultation intake API — upload a recording, get a redacted transcript and a Markdown summary",
        version="0.1.0",
    )
    app.state.transcription_service = transcription_service
    app.state.summary_service = summary_service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(IntakeError)
    async def handle_intake_error(request: Request, exc: IntakeError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_payload())

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        logger.info(f"[API] Invalid request to {request.url.path}: {exc.errors()}")
        return JSONResponse(status_code=400, content={"error": "Invalid request"})

    app.include_router(consultation.router, prefix="/api")
    return app
