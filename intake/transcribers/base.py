"""
Transcriber abstract base class
"""
from abc import ABC, abstractmethod

from intake.models.transcript import Transcript

AUTO_LANGUAGE = "auto"


class Transcriber(ABC):
    """Transcription backend adapter"""

    name: str = "base"

    @abstractmethod
    def transcribe(self, audio: bytes, language: str = AUTO_LANGUAGE) -> Transcript:
        """
        Transcribe an audio buffer into the canonical transcript

        :param audio: raw bytes of the recording
        :param language: language code, or "auto" to let the provider detect it
        :return: Transcript
        :raises ProviderError: transport, auth or provider-side failure
        """
        ...
