"""Stage 5: final clean-up of marked text."""

from .punctuation import BREATH_MARK, SENTENCE_START

DOUBLE_MARK = BREATH_MARK * 2


def finalize_marks(text: str) -> str:
    """Normalize breath marks in finished text.

    1. Append a trailing breath mark if missing
    2. Collapse runs of breath marks into one
    3. Drop the 。 that stage 1 put at the start of every line

    Args:
        text: Marked text

    Returns:
        Normalized marked text
    """
    result = text
    if not result.endswith(BREATH_MARK):
        result += BREATH_MARK

    while DOUBLE_MARK in result:
        result = result.replace(DOUBLE_MARK, BREATH_MARK)

    lines = [
        line[1:] if line.startswith(SENTENCE_START) else line
        for line in result.split("\n")
    ]
    return "\n".join(lines)
