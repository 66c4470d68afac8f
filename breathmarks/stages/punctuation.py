"""Punctuation tables and helpers shared by the marking stages."""

import re


# Reserved marker tokens
BREATH_MARK = "▼"
PAUSE_MARK = "、"  # enumeration comma
SENTENCE_START = "。"  # prefixed to every line by stage 1

# Punctuation after which stage 1 always inserts a breath mark
MAJOR_PUNCTUATION = "，。？！：；"

# Delimiters used to cut pre-broken text into sentences
SENTENCE_DELIMITERS = MAJOR_PUNCTUATION + BREATH_MARK

# Punctuation considered when merging short segments
MERGE_PUNCTUATION = "，。？！；："

# Everything that does not count towards a segment's effective length
PUNCTUATION_CHARS = frozenset(
    "，。！？；：（）【】《》、…—"
    ",.!?;:()[]<>/-~`·@#$%^&*_+=|\\"
)

# Merge priority: the higher, the stronger the boundary
PUNCTUATION_PRIORITY = {
    "。": 5,
    "！": 5,
    "？": 5,
    "…": 5,
    ".": 5,
    "!": 5,
    "?": 5,
    "；": 4,
    ";": 4,
    "，": 3,
    "（": 3,
    "）": 3,
    "【": 3,
    "】": 3,
    "《": 3,
    "》": 3,
    ",": 3,
    "(": 3,
    ")": 3,
    "[": 3,
    "]": 3,
    "<": 3,
    ">": 3,
    "：": 2,
    ":": 2,
    "、": 1,
}

PUNCTUATION_PATTERN = re.compile(
    "[" + "".join(re.escape(c) for c in sorted(PUNCTUATION_CHARS)) + "]"
)


def is_punctuation(char: str) -> bool:
    """Check whether a single character is punctuation.

    Args:
        char: Character to test

    Returns:
        True if the character is in the punctuation table
    """
    return char in PUNCTUATION_CHARS


def punctuation_priority(char: str) -> int:
    """Return the merge priority of a punctuation mark (0 if unknown)."""
    return PUNCTUATION_PRIORITY.get(char, 0)


def strip_punctuation(text: str) -> str:
    return PUNCTUATION_PATTERN.sub("", text)


def effective_length(text: str) -> int:
    """Count the characters of text that are not punctuation.

    Args:
        text: Segment text

    Returns:
        Length of text with every punctuation mark removed
    """
    return len(strip_punctuation(text))
