"""Data models for the breath-mark pipeline."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class WordSegment:
    """A dictionary word or single character found in a sentence."""

    word: str  # Matched dictionary word, or the character itself
    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start


@dataclass(frozen=True)
class Sentence:
    """A sentence candidate cut out of pre-broken text."""

    text: str  # Trimmed fragment
    length: int
    start: int  # Offset of the trimmed fragment in the document
    end: int


@dataclass(frozen=True)
class PrefixMatch:
    """Result of matching dictionary words against the start of a text."""

    word: str  # Dictionary entry as stored
    length: int  # Characters of the text consumed by the match

    @property
    def matched(self) -> bool:
        return self.length > 0


@dataclass
class NoteRecord:
    """One note read from a batch input file."""

    note_id: str
    title: str
    content: str
    line_number: int


@dataclass
class MarkingResult:
    """Result of marking a single note."""

    note: NoteRecord
    marked_text: str
    segment_count: int
    error: Optional[str] = None
