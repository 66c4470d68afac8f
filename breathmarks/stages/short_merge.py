"""Stage 4: merge segments that are too short to be read on one breath."""

import logging

from .pause_split import MIN_LENGTH
from .punctuation import BREATH_MARK, MERGE_PUNCTUATION, effective_length, punctuation_priority

logger = logging.getLogger(__name__)


def last_punctuation(text: str) -> str:
    """Trailing ，。？！；： of text, or an empty string."""
    if text and text[-1] in MERGE_PUNCTUATION:
        return text[-1]
    return ""


def first_punctuation(text: str) -> str:
    """Leading ，。？！；： of text, or an empty string."""
    if text and text[0] in MERGE_PUNCTUATION:
        return text[0]
    return ""


def merge_short_segments(text: str, min_length: int = MIN_LENGTH) -> str:
    """Fold every segment shorter than min_length into a neighbour.

    The side with the stronger punctuation at the shared edge wins: if the
    previous segment ends with a stronger mark than the next one starts
    with, the short segment joins the previous one, otherwise (including
    ties) the next one. When the chosen neighbour does not exist the other
    one is used; a lone segment is left alone.

    Args:
        text: Text with breath marks
        min_length: Minimum effective length of a segment

    Returns:
        Text with the short segments merged
    """
    segments = text.split(BREATH_MARK)
    lengths = [effective_length(s) for s in segments]

    i = 0
    while i < len(segments):
        if lengths[i] >= min_length or len(segments) == 1:
            i += 1
            continue

        has_prev = i > 0
        has_next = i < len(segments) - 1
        prev_priority = punctuation_priority(last_punctuation(segments[i - 1])) if has_prev else 0
        next_priority = punctuation_priority(first_punctuation(segments[i + 1])) if has_next else 0

        merge_backward = prev_priority > next_priority
        if merge_backward and not has_prev:
            merge_backward = False
        elif not merge_backward and not has_next:
            merge_backward = True

        if merge_backward:
            logger.debug("Merging %r into previous %r", segments[i], segments[i - 1])
            segments[i - 1] += segments[i]
            lengths[i - 1] = effective_length(segments[i - 1])
            del segments[i]
            del lengths[i]
            i -= 1
        else:
            logger.debug("Merging %r into next %r", segments[i], segments[i + 1])
            segments[i] += segments[i + 1]
            lengths[i] = effective_length(segments[i])
            del segments[i + 1]
            del lengths[i + 1]

    return BREATH_MARK.join(segments)
