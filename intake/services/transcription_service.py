"""
Transcription orchestrator
Stores the upload temporarily → runs the configured transcriber → always deletes the upload
"""
import logging
import shutil
import time
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Iterator, Optional

from intake.errors import (
    InvalidInputError,
    LanguageDetectionError,
    NoSpeechDetectedError,
    ProviderError,
)
from intake.models.transcript import Transcript
from intake.transcribers.base import AUTO_LANGUAGE, Transcriber

logger = logging.getLogger(__name__)

SUPPORTED_LANGUAGES: tuple[str, ...] = (
    AUTO_LANGUAGE, "en", "zh", "es", "fr", "de", "ja", "ko", "pt", "vi", "hi", "ru",
)

DEFAULT_AUDIO_SUFFIX = ".webm"


class TranscriptionService:
    """
    Consultation transcription

    The transcriber is chosen once at startup; requests cannot switch it.
    Provider failures are logged with full detail and surfaced with a
    sanitized message.
    """

    def __init__(self, transcriber: Transcriber, upload_dir: Path):
        self.transcriber = transcriber
        self.upload_dir = Path(upload_dir)
        logger.info(
            f"[TranscriptionService] Initialized: transcriber={transcriber.name}, "
            f"upload_dir={self.upload_dir}"
        )

    def transcribe(
        self,
        upload: BinaryIO,
        filename: Optional[str] = None,
        language: str = AUTO_LANGUAGE,
    ) -> Transcript:
        """
        Transcribe an uploaded recording

        :param upload: readable binary stream of the audio file
        :param filename: client file name, only used for its extension
        :param language: language code or "auto"
        :return: canonical Transcript
        """
        if language not in SUPPORTED_LANGUAGES:
            raise InvalidInputError(
                f"Unsupported language: {language} (expected one of: {', '.join(SUPPORTED_LANGUAGES)})"
            )

        with self._stored_upload(upload, filename) as path:
            audio = path.read_bytes()
            if not audio:
                raise InvalidInputError("Uploaded audio file is empty")

            logger.info(
                f"[TranscriptionService] Transcribing {path.name}: "
                f"{len(audio) / 1024:.1f} KB, language={language}"
            )
            try:
                return self.transcriber.transcribe(audio, language)
            except (LanguageDetectionError, NoSpeechDetectedError) as exc:
                logger.warning(f"[TranscriptionService] {exc.message}")
                raise
            except ProviderError as exc:
                logger.error(
                    f"[TranscriptionService] Provider failure: {exc.message}, detail={exc.detail}"
                )
                raise ProviderError("Transcription failed") from exc
            except Exception as exc:
                logger.error(f"[TranscriptionService] Unexpected failure: {exc}", exc_info=True)
                raise ProviderError("Transcription failed") from exc

    @contextmanager
    def _stored_upload(self, upload: BinaryIO, filename: Optional[str]) -> Iterator[Path]:
        """Write the upload to temporary storage and remove it on every exit path"""
        suffix = Path(filename or "").suffix or DEFAULT_AUDIO_SUFFIX
        self.upload_dir.mkdir(parents=True, exist_ok=True)
        path = self.upload_dir / f"{int(time.time() * 1000)}-{uuid.uuid4().hex}{suffix}"

        try:
            with open(path, "wb") as out:
                shutil.copyfileobj(upload, out)
            yield path
        finally:
            self._discard(path)

    @staticmethod
    def _discard(path: Path) -> None:
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            # never replaces the error that is already propagating
            logger.warning(f"[TranscriptionService] Could not delete upload {path}: {exc}")
