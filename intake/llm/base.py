"""
LLM abstract base class
"""
from abc import ABC, abstractmethod


class LLMSummarizer(ABC):
    """Generative-text backend used for consultation summaries"""

    @abstractmethod
    def summarize(self, transcript_text: str) -> str:
        """
        Summarize a consultation transcript as Markdown

        :param transcript_text: plain transcript text
        :return: the backend's text response
        """
        ...
