"""Split over-long sentences at enumeration commas (、)."""

import logging
from typing import Iterable, Optional

from .punctuation import PAUSE_MARK, effective_length

logger = logging.getLogger(__name__)

MAX_LENGTH = 20
MIN_LENGTH = 6


def find_protected_positions(text: str, words: Iterable[str]) -> frozenset[int]:
    """Collect every position of text covered by an occurrence of a word.

    Args:
        text: Whole document
        words: Words whose 、 must never become a split point

    Returns:
        Set of protected character offsets
    """
    protected = set()
    for word in words:
        if not word:
            continue
        pos = text.find(word)
        while pos != -1:
            protected.update(range(pos, pos + len(word)))
            pos = text.find(word, pos + 1)
    return frozenset(protected)


def try_split_at_pause(
    text: str,
    offset: int = 0,
    protected: frozenset[int] = frozenset(),
    max_length: int = MAX_LENGTH,
    min_length: int = MIN_LENGTH,
) -> Optional[list[str]]:
    """Try to split text right after one of its 、 characters.

    A position is skipped when either side would have fewer than
    ``min_length`` non-punctuation characters. The first position where
    both sides fit in ``max_length`` wins; otherwise an oversized side is
    split again on its own.

    Args:
        text: Sentence to split
        offset: Offset of text in the document, for protected lookups
        protected: Document offsets covered by pause_proper words
        max_length: Maximum raw length of a part
        min_length: Minimum effective length of a part

    Returns:
        The parts, or None if no 、 qualifies
    """
    positions = [
        i
        for i, char in enumerate(text)
        if char == PAUSE_MARK and offset + i not in protected
    ]
    for pos in positions:
        part1 = text[: pos + 1]
        part2 = text[pos + 1 :]

        if effective_length(part1) < min_length or effective_length(part2) < min_length:
            continue

        if len(part1) <= max_length and len(part2) <= max_length:
            return [part1, part2]

        if len(part1) > max_length:
            sub_split = try_split_at_pause(part1, offset, protected, max_length, min_length)
            if sub_split:
                return sub_split + [part2]

        if len(part2) > max_length:
            sub_split = try_split_at_pause(
                part2, offset + pos + 1, protected, max_length, min_length
            )
            if sub_split:
                return [part1] + sub_split

    return None


def split_at_pauses(
    text: str,
    offset: int = 0,
    protected: frozenset[int] = frozenset(),
    max_length: int = MAX_LENGTH,
    min_length: int = MIN_LENGTH,
) -> list[str]:
    """Pause-split text if it is too long; fall back to the text itself."""
    if len(text) <= max_length:
        return [text]
    parts = try_split_at_pause(text, offset, protected, max_length, min_length)
    if parts is None:
        logger.debug("No usable 、 in %r", text)
        return [text]
    logger.debug("Pause split %r into %s", text, parts)
    return parts
