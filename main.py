"""
MeritX Intake — legal consultation transcription and summary backend

Run:
    python main.py
    or
    uvicorn main:app --host 0.0.0.0 --port 3001 --reload
"""
import logging
import sys

import uvicorn

from intake import create_app
from intake.config import settings
from intake.errors import ConfigError

# Logging
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s │ %(levelname)-7s │ %(name)s │ %(message)s",
    datefmt="%H:%M:%S",
)

logger = logging.getLogger("intake")

try:
    app = create_app()
except ConfigError as exc:
    logger.critical(f"Invalid configuration: {exc}")
    sys.exit(1)

if __name__ == "__main__":
    logger.info(f"🚀 MeritX Intake starting on http://{settings.host}:{settings.port}")
    logger.info(f"📖 API docs: http://127.0.0.1:{settings.port}/docs")
    logger.info(f"🎙️ Transcriber: {settings.transcriber_type}")
    logger.info(f"🤖 LLM: {settings.llm_model} @ {settings.llm_base_url}")

    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        reload=False,
    )
