from __future__ import annotations

from typing import TYPE_CHECKING

from intake.errors import ConfigError

if TYPE_CHECKING:
    from intake.config import Settings
    from intake.transcribers.base import Transcriber


def create_transcriber(settings: Settings) -> Transcriber:
    """Create the transcriber selected by TRANSCRIBER_TYPE"""
    t_type = settings.transcriber_type.lower()

    if t_type == "assemblyai":
        from intake.transcribers.assemblyai_transcriber import AssemblyAITranscriber

        return AssemblyAITranscriber(
            api_key=settings.assemblyai_api_key,
            base_url=settings.assemblyai_base_url,
            poll_interval=settings.assemblyai_poll_interval,
            timeout=settings.provider_timeout,
        )

    elif t_type == "deepgram":
        from intake.transcribers.deepgram_transcriber import DeepgramTranscriber

        return DeepgramTranscriber(
            api_key=settings.deepgram_api_key,
            base_url=settings.deepgram_base_url,
            timeout=settings.provider_timeout,
        )

    else:
        raise ConfigError(f"Unsupported transcriber type: {t_type} (expected assemblyai / deepgram)")
