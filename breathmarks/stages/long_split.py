"""Stage 3: split over-long sentences at semantic boundaries."""

import logging
from typing import TYPE_CHECKING, Optional

from ..models import Sentence, WordSegment
from .pause_split import MAX_LENGTH, MIN_LENGTH, find_protected_positions, split_at_pauses
from .punctuation import BREATH_MARK

if TYPE_CHECKING:
    from ..dictionary import Lexicon

logger = logging.getLogger(__name__)

MAX_RECURSION_DEPTH = 3


def segment_words(text: str, lexicon: "Lexicon") -> list[WordSegment]:
    """Segment text by longest dictionary match.

    Characters not covered by any dictionary word become single-character
    segments, so the result always tiles the whole text.

    Args:
        text: Sentence to segment
        lexicon: Dictionary snapshot

    Returns:
        Segments in positional order
    """
    segments = []
    pos = 0
    while pos < len(text):
        match = lexicon.longest_match(text, pos)
        if match is not None:
            segments.append(WordSegment(match.word, pos, pos + match.length))
            pos += match.length
        else:
            segments.append(WordSegment(text[pos], pos, pos + 1))
            pos += 1
    return segments


def split_veto(left: str, right: str, lexicon: "Lexicon") -> Optional[str]:
    """Name the rule forbidding a break between two segments, if any.

    Args:
        left: Word before the candidate boundary
        right: Word after the candidate boundary
        lexicon: Dictionary snapshot

    Returns:
        Rule name, or None if the break is allowed
    """
    if lexicon.contains("number", left) and lexicon.contains("no_number_after", right):
        return "number_then_unit"
    if lexicon.contains("number", right) and lexicon.contains("no_number_before", left):
        return "prefix_then_number"
    if lexicon.contains("no_split_before", left):
        return "no_split_before"
    if lexicon.contains("no_split_after", right):
        return "no_split_after"
    return None


def is_valid_split_point(
    segments: list[WordSegment], index: int, lexicon: "Lexicon"
) -> bool:
    """Check the boundary between segments[index] and segments[index + 1]."""
    if index < 0 or index >= len(segments) - 1:
        return False
    left = segments[index].word
    right = segments[index + 1].word
    rule = split_veto(left, right, lexicon)
    if rule is not None:
        logger.debug("Break between %r and %r vetoed by %s", left, right, rule)
        return False
    return True


def find_best_split_point(
    segments: list[WordSegment], text_length: int, lexicon: "Lexicon"
) -> Optional[int]:
    """Return the allowed boundary closest to the middle of the text.

    Ties go to the earlier boundary.
    """
    if len(segments) <= 1:
        return None

    mid_point = text_length // 2
    best_pos = None
    min_distance = None

    for i in range(len(segments) - 1):
        if not is_valid_split_point(segments, i, lexicon):
            continue
        pos = segments[i].end
        distance = abs(pos - mid_point)
        if min_distance is None or distance < min_distance:
            min_distance = distance
            best_pos = pos

    return best_pos


def split_by_words(
    sentence: str,
    lexicon: "Lexicon",
    depth: int = 0,
    max_length: int = MAX_LENGTH,
    max_depth: int = MAX_RECURSION_DEPTH,
) -> str:
    """Recursively halve a sentence at word boundaries until parts fit.

    Gives up on a part, returning it unchanged, once ``max_depth`` is
    reached or when every boundary is vetoed.

    Args:
        sentence: Text to split
        lexicon: Dictionary snapshot
        depth: Current recursion depth
        max_length: Length above which a part gets split
        max_depth: Recursion cap

    Returns:
        The sentence with breath marks inserted
    """
    if depth >= max_depth:
        logger.debug("Recursion cap reached, keeping %r", sentence)
        return sentence
    if len(sentence) <= max_length:
        return sentence

    segments = segment_words(sentence, lexicon)
    split_pos = find_best_split_point(segments, len(sentence), lexicon)
    if split_pos is None:
        logger.debug("No valid split point in %r", sentence)
        return sentence

    first = split_by_words(sentence[:split_pos], lexicon, depth + 1, max_length, max_depth)
    second = split_by_words(sentence[split_pos:], lexicon, depth + 1, max_length, max_depth)
    return first + BREATH_MARK + second


def candidate_split_points(text: str, lexicon: "Lexicon") -> list[int]:
    """Offsets of every word boundary the veto rules allow."""
    segments = segment_words(text, lexicon)
    return [
        segments[i].end
        for i in range(len(segments) - 1)
        if is_valid_split_point(segments, i, lexicon)
    ]


def annotate_boundaries(text: str, lexicon: "Lexicon", separator: str = "|") -> str:
    """Insert separator at every allowed word boundary of text."""
    result = []
    last = 0
    for pos in candidate_split_points(text, lexicon):
        result.append(text[last:pos])
        result.append(separator)
        last = pos
    result.append(text[last:])
    return "".join(result)


def split_long_sentence(
    sentence: Sentence,
    lexicon: "Lexicon",
    protected: frozenset[int] = frozenset(),
    max_length: int = MAX_LENGTH,
    min_length: int = MIN_LENGTH,
    max_depth: int = MAX_RECURSION_DEPTH,
) -> str:
    """Pause-split a sentence, then word-split whatever is still too long."""
    parts = split_at_pauses(
        sentence.text, sentence.start, protected, max_length, min_length
    )
    processed = [
        split_by_words(part, lexicon, 0, max_length, max_depth)
        if len(part) > max_length
        else part
        for part in parts
    ]
    return BREATH_MARK.join(processed)


def split_long_sentences(
    text: str,
    sentences: list[Sentence],
    lexicon: "Lexicon",
    max_length: int = MAX_LENGTH,
    min_length: int = MIN_LENGTH,
    max_depth: int = MAX_RECURSION_DEPTH,
) -> str:
    """Replace every over-long sentence of text with its split form.

    Sentences are replaced at their recorded offsets, so repeated identical
    sentences are each handled where they occur.

    Args:
        text: Text produced by stage 1
        sentences: Sentences extracted from that text by stage 2
        lexicon: Dictionary snapshot
        max_length: Sentences longer than this get split
        min_length: Minimum effective length of a pause-split part
        max_depth: Recursion cap of the word split

    Returns:
        Text with additional breath marks
    """
    protected = find_protected_positions(text, lexicon.words("pause_proper"))

    pieces = []
    cursor = 0
    for sentence in sorted(sentences, key=lambda s: s.start):
        if sentence.length <= max_length:
            continue
        processed = split_long_sentence(
            sentence, lexicon, protected, max_length, min_length, max_depth
        )
        logger.debug("Long sentence %r -> %r", sentence.text, processed)
        pieces.append(text[cursor : sentence.start])
        pieces.append(processed)
        cursor = sentence.end
    pieces.append(text[cursor:])
    return "".join(pieces)
