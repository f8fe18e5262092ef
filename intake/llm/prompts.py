"""
Prompt templates
Fixed legal-consultation summary prompt
"""

# ==================== Summary sections (in order) ====================

SUMMARY_SECTIONS: tuple[str, ...] = (
    "Client Information & Core Issue",
    "Key Facts & Timeline",
    "Potential Legal Strategies discussed",
    "Next Steps & Required Documents for the client",
    "Recommended Follow-up Actions for the law firm",
)


# ==================== Prompt template ====================

LEGAL_SUMMARY_PROMPT = """You are a legal assistant summarizing a client consultation for a law firm (e.g. immigration, family, civil).

Please provide a structured summary including:
{sections}

Format the response in Markdown.

Here is the consultation transcript:
"""


def build_summary_prompt(transcript_text: str) -> str:
    """
    Assemble the summary prompt

    :param transcript_text: consultation transcript, appended verbatim
    :return: the full prompt
    """
    sections = "\n".join(f"{i}. {title}" for i, title in enumerate(SUMMARY_SECTIONS, start=1))
    return LEGAL_SUMMARY_PROMPT.format(sections=sections) + transcript_text
