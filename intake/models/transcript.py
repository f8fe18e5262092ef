"""
Canonical transcript data model

Every transcription backend normalizes its response into these types.
All times are integer milliseconds.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple

# Languages written without spaces between words
NON_SPACED_LANGUAGES = frozenset({"zh", "ja", "th"})


def separator_for(language: Optional[str]) -> str:
    """Word separator for a language code ("" for zh / ja / th, otherwise a space)"""
    if language and language.lower().split("-")[0] in NON_SPACED_LANGUAGES:
        return ""
    return " "


def speaker_label(index: int) -> str:
    """Map a zero-based speaker index to a letter label: 0 -> A, 1 -> B ..."""
    if index < 0:
        raise ValueError(f"speaker index must be >= 0, got {index}")
    return chr(ord("A") + index)


def join_words(texts: Sequence[str], separator: str = " ") -> str:
    """Join word texts with the language separator, never dropping characters"""
    return separator.join(texts)


class TranscriptStatus(str, Enum):
    completed = "completed"
    failed = "failed"


@dataclass(frozen=True)
class Word:
    """A single recognized word"""
    text: str
    start_ms: int
    end_ms: int
    confidence: float
    speaker: str


@dataclass(frozen=True)
class Utterance:
    """One continuous speaker turn"""
    speaker: str
    text: str
    start_ms: int
    end_ms: int
    words: Tuple[Word, ...] = ()

    @classmethod
    def from_words(
        cls,
        speaker: str,
        words: Sequence[Word],
        text: Optional[str] = None,
        separator: str = " ",
    ) -> "Utterance":
        """
        Build an utterance spanning its words

        :param speaker: speaker label
        :param words: ordered, non-empty word sequence
        :param text: provider text; joined from the words when omitted
        :param separator: word separator of the spoken language
        """
        if not words:
            raise ValueError("an utterance needs at least one word")
        if text is None:
            text = join_words([w.text for w in words], separator)
        return cls(
            speaker=speaker,
            text=text,
            start_ms=words[0].start_ms,
            end_ms=words[-1].end_ms,
            words=tuple(words),
        )


@dataclass(frozen=True)
class Transcript:
    """
    Backend-agnostic transcript

    When utterances is None the recording was not diarized and text is the
    only authoritative content.
    """
    id: str
    status: TranscriptStatus
    text: str
    utterances: Optional[Tuple[Utterance, ...]] = None
