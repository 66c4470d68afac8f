"""Stage 1: paragraph starts and breath marks after major punctuation."""

import re

from .punctuation import BREATH_MARK, MAJOR_PUNCTUATION, SENTENCE_START

MAJOR_PUNCTUATION_PATTERN = re.compile(f"([{MAJOR_PUNCTUATION}])")


def add_punctuation_breaks(text: str) -> str:
    """Pre-break raw text at paragraph starts and major punctuation.

    Every non-blank line is trimmed and prefixed with 。 so that a new
    paragraph closes the previous implicit sentence; blank lines become
    empty. A breath mark is then inserted after each of ，。？！：；.

    Args:
        text: Raw multi-line text

    Returns:
        Text with breath marks, newlines preserved
    """
    lines = []
    for line in text.split("\n"):
        line = line.strip()
        lines.append(SENTENCE_START + line if line else "")
    return MAJOR_PUNCTUATION_PATTERN.sub(rf"\1{BREATH_MARK}", "\n".join(lines))
