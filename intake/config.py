"""
MeritX Intake configuration
Loads every setting from the environment / .env file and exposes the global singleton settings
"""
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from intake.errors import ConfigError

load_dotenv()

BASE_DIR = Path(__file__).resolve().parent.parent

TRANSCRIBER_TYPES = ("assemblyai", "deepgram")


@dataclass
class Settings:
    """Global configuration"""

    # Server
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3001"))
    cors_origins: str = os.getenv("CORS_ORIGINS", "*")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Transcription backend: assemblyai / deepgram (fixed for the process lifetime)
    transcriber_type: str = os.getenv("TRANSCRIBER_TYPE", "assemblyai")

    # AssemblyAI
    assemblyai_api_key: str = os.getenv("ASSEMBLYAI_API_KEY", "")
    assemblyai_base_url: str = os.getenv("ASSEMBLYAI_BASE_URL", "https://api.assemblyai.com")
    assemblyai_poll_interval: float = float(os.getenv("ASSEMBLYAI_POLL_INTERVAL", "3.0"))

    # Deepgram
    deepgram_api_key: str = os.getenv("DEEPGRAM_API_KEY", "")
    deepgram_base_url: str = os.getenv("DEEPGRAM_BASE_URL", "https://api.deepgram.com")

    # Network timeout for provider calls (seconds)
    provider_timeout: float = float(os.getenv("PROVIDER_TIMEOUT", "300"))

    # LLM (OpenAI compatible; defaults to Gemini's compatibility endpoint)
    llm_api_key: str = os.getenv("LLM_API_KEY", os.getenv("GEMINI_API_KEY", ""))
    llm_base_url: str = os.getenv(
        "LLM_BASE_URL", "https://generativelanguage.googleapis.com/v1beta/openai/"
    )
    llm_model: str = os.getenv("LLM_MODEL", "gemini-2.5-flash")

    # Temporary upload storage
    upload_dir: Path = BASE_DIR / os.getenv("UPLOAD_DIR", "uploads")

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    def validate(self) -> None:
        """
        Check the settings needed to serve requests

        :raises ConfigError: unknown backend or a missing credential
        """
        t_type = self.transcriber_type.lower()
        if t_type not in TRANSCRIBER_TYPES:
            raise ConfigError(
                f"Unsupported TRANSCRIBER_TYPE: {self.transcriber_type} "
                f"(expected one of: {' / '.join(TRANSCRIBER_TYPES)})"
            )
        if t_type == "assemblyai" and not self.assemblyai_api_key:
            raise ConfigError("Missing ASSEMBLYAI_API_KEY, set it in .env")
        if t_type == "deepgram" and not self.deepgram_api_key:
            raise ConfigError("Missing DEEPGRAM_API_KEY, set it in .env")
        if not self.llm_api_key:
            raise ConfigError("Missing LLM_API_KEY (or GEMINI_API_KEY), set it in .env")


settings = Settings()
