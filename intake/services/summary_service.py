"""
Consultation summary service
"""
import logging

from intake.errors import InvalidInputError, SummarizationError
from intake.llm.base import LLMSummarizer

logger = logging.getLogger(__name__)


class SummaryService:
    """Turns transcript text into a Markdown legal-consultation summary"""

    def __init__(self, llm: LLMSummarizer):
        self.llm = llm

    def summarize(self, text: str) -> str:
        """
        :param text: plain transcript text
        :return: Markdown summary, exactly as returned by the LLM
        :raises InvalidInputError: empty or whitespace-only text (LLM is not called)
        :raises SummarizationError: the LLM call failed
        """
        if not text or not text.strip():
            raise InvalidInputError("Transcript contains no text to summarize")

        try:
            return self.llm.summarize(text)
        except SummarizationError as exc:
            logger.error(f"[SummaryService] Summarization failed: {exc.details}")
            raise
        except Exception as exc:
            logger.error(f"[SummaryService] Summarization failed: {exc}", exc_info=True)
            raise SummarizationError(details=str(exc)) from exc
