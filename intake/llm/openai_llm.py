"""
LLM summarizer over an OpenAI-compatible API
Defaults to Gemini through its OpenAI compatibility endpoint; any compatible
service (OpenAI / DeepSeek / Ollama ...) works by changing base_url.
"""
import logging
from typing import Optional

from openai import OpenAI

from intake.errors import SummarizationError
from intake.llm.base import LLMSummarizer
from intake.llm.prompts import build_summary_prompt

logger = logging.getLogger(__name__)

GEMINI_OPENAI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"


class OpenAILLM(LLMSummarizer):
    """
    OpenAI-compatible chat completions

    One synchronous request per summary, the first choice is returned as-is.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = GEMINI_OPENAI_BASE_URL,
        model: str = "gemini-2.5-flash",
        client: Optional[OpenAI] = None,
    ):
        self.model = model
        self.client = client or OpenAI(api_key=api_key, base_url=base_url)
        logger.info(f"[LLM] Initialized: model={model}, base_url={base_url}")

    def summarize(self, transcript_text: str) -> str:
        prompt = build_summary_prompt(transcript_text)
        logger.info(f"[LLM] Summarizing: model={self.model}, prompt_len={len(prompt)}")

        response = self.client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
        )

        if not response.choices or response.choices[0].message.content is None:
            raise SummarizationError(details="LLM returned no text")

        summary = response.choices[0].message.content
        logger.info(f"[LLM] Summary complete: output_len={len(summary)}")
        return summary
