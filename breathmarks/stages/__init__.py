"""Marking stages, applied in order by the pipeline."""

from .finalize import finalize_marks
from .long_split import (
    annotate_boundaries,
    candidate_split_points,
    segment_words,
    split_by_words,
    split_long_sentences,
)
from .pause_split import split_at_pauses, try_split_at_pause
from .prebreak import add_punctuation_breaks
from .sentences import extract_sentences
from .short_merge import merge_short_segments

__all__ = [
    "add_punctuation_breaks",
    "extract_sentences",
    "split_at_pauses",
    "try_split_at_pause",
    "segment_words",
    "split_by_words",
    "split_long_sentences",
    "candidate_split_points",
    "annotate_boundaries",
    "merge_short_segments",
    "finalize_marks",
]
