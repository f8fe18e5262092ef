"""
Error taxonomy

Every error that reaches the HTTP layer derives from IntakeError and knows
its status code and public payload. Provider internals stay in ``detail``
and are only ever logged.
"""
from typing import Optional


class IntakeError(Exception):
    """Base class for errors surfaced to API callers"""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_payload(self) -> dict:
        return {"error": self.message}


class InvalidInputError(IntakeError):
    """Missing or empty request input"""

    status_code = 400


class ProviderError(IntakeError):
    """Transport, auth or processing failure at the transcription backend"""

    def __init__(self, message: str, detail: Optional[str] = None):
        super().__init__(message)
        self.detail = detail


class LanguageDetectionError(ProviderError):
    """Auto-detection picked a language that produced no usable text"""

    def __init__(self, detected_language: str, confidence_percent: int):
        self.detected_language = detected_language
        self.confidence_percent = confidence_percent
        super().__init__(
            f"No speech could be transcribed using the auto-detected language "
            f"'{detected_language}' ({confidence_percent}% confidence). "
            f"Please select the spoken language explicitly and try again."
        )


class NoSpeechDetectedError(ProviderError):
    """The recording contains no recognizable speech in any language"""

    def __init__(self, message: str = "No speech was detected in the audio recording."):
        super().__init__(message)


class SummarizationError(IntakeError):
    """The LLM backend failed to produce a summary"""

    def __init__(self, message: str = "Summarization failed", details: Optional[str] = None):
        super().__init__(message)
        self.details = details

    def to_payload(self) -> dict:
        payload = super().to_payload()
        if self.details:
            payload["details"] = self.details
        return payload


class ConfigError(Exception):
    """Invalid or incomplete startup configuration"""
