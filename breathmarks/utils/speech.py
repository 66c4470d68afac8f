"""Helpers for handing marked text to a speech synthesiser."""

import re

from ..stages.punctuation import BREATH_MARK

# Punctuation the read-aloud player drops right before a breath mark
SPOKEN_DROP_PATTERN = re.compile(f"[，。！？、；：（）【】《》](?={BREATH_MARK})")


def split_for_speech(marked_text: str) -> list[str]:
    """Split marked text into the non-empty segments read one at a time."""
    return [segment for segment in marked_text.split(BREATH_MARK) if segment]


def spoken_form(marked_text: str) -> str:
    """Remove punctuation directly preceding a breath mark."""
    return SPOKEN_DROP_PATTERN.sub("", marked_text)
