"""Stage 2: cut pre-broken text into sentence candidates."""

import re

from ..models import Sentence
from .punctuation import SENTENCE_DELIMITERS

FRAGMENT_PATTERN = re.compile(f"[^{SENTENCE_DELIMITERS}]+")


def extract_sentences(text: str) -> list[Sentence]:
    """Split text on ，。？！：；▼ and return the non-blank fragments.

    Offsets refer to the trimmed fragment inside ``text`` so later stages
    can replace a sentence in place.

    Args:
        text: Text produced by stage 1

    Returns:
        Sentences in document order
    """
    sentences = []
    for match in FRAGMENT_PATTERN.finditer(text):
        fragment = match.group(0)
        trimmed = fragment.strip()
        if not trimmed:
            continue
        start = match.start() + len(fragment) - len(fragment.lstrip())
        sentences.append(
            Sentence(
                text=trimmed,
                length=len(trimmed),
                start=start,
                end=start + len(trimmed),
            )
        )
    return sentences
