"""
Utterance merger

Segment-oriented providers split one continuous speaker turn into several
adjacent segments. merge_utterances coalesces them back into turns in a
single stable left-to-right pass.
"""
from typing import Iterable, List, Optional

from intake.models.transcript import Utterance


def join_text(left: str, right: str, separator: str = " ") -> str:
    """
    Concatenate two segment texts

    The separator is only inserted when neither side already has boundary
    whitespace.
    """
    if not left:
        return right
    if not right:
        return left
    if left[-1].isspace() or right[0].isspace():
        return left + right
    return left + separator + right


def merge_utterances(segments: Iterable[Utterance], separator: str = " ") -> List[Utterance]:
    """
    Merge consecutive same-speaker segments

    :param segments: raw segments in provider order
    :param separator: word separator of the spoken language
    :return: coalesced speaker turns, never reordered
    """
    merged: List[Utterance] = []
    current: Optional[Utterance] = None

    for segment in segments:
        if current is not None and segment.speaker == current.speaker:
            current = Utterance(
                speaker=current.speaker,
                text=join_text(current.text, segment.text, separator),
                start_ms=current.start_ms,
                end_ms=segment.end_ms,
                words=current.words + segment.words,
            )
            continue

        if current is not None:
            merged.append(current)
        current = segment

    if current is not None:
        merged.append(current)
    return merged
