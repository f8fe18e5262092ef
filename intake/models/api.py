"""
HTTP request / response models
"""
from typing import List, Optional

from pydantic import BaseModel

from intake.models.transcript import Transcript


class SummarizeRequest(BaseModel):
    """Body of POST /api/summarize"""
    text: Optional[str] = None     # plain transcript text


class SummarizeResponse(BaseModel):
    summary: str                   # Markdown


class TranscribeResponse(BaseModel):
    transcript: Transcript


class HealthResponse(BaseModel):
    status: str
    timestamp: str                 # ISO 8601, UTC


class LanguagesResponse(BaseModel):
    languages: List[str]


class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None
