"""Splitting of a raw completion into the seven numbered answers.

The split is a heuristic over free text: it cuts on every "<digit>. " it finds.
Text before "1. ", numbers of two or more digits, or a numbered list inside an
answer shift the alignment. Items past the seventh (e.g. an "8. ") are dropped.
"""

import re

from .schemas import QUESTIONS, AnswerSet

NUMBERING_PATTERN = re.compile(r"\d\.\s")


def segment(raw: str) -> AnswerSet:
    """Split a completion into answers aligned with QUESTIONS.

    Args:
        raw: Completion text, ideally numbered "1. " through "7. ".

    Returns:
        AnswerSet with one trimmed answer per fragment found. Questions
        without a fragment get None.

    Examples:
        >>> segment("1. Tech\\n2. Useful").texts[:3]
        ['Tech', 'Useful', None]
    """
    fragments = [fragment for fragment in NUMBERING_PATTERN.split(raw) if fragment]
    return AnswerSet.from_texts([fragment.strip() for fragment in fragments[: len(QUESTIONS)]])
