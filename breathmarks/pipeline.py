"""Main breath-mark pipeline."""

import asyncio
import json
import logging
import re
from pathlib import Path
from typing import Optional

import pandas as pd
from tqdm import tqdm

from .config import Config, SegmentationConfig
from .dictionary import DictionaryService, Lexicon
from .models import MarkingResult, NoteRecord
from .stages import (
    add_punctuation_breaks,
    extract_sentences,
    finalize_marks,
    merge_short_segments,
    split_long_sentences,
)
from .utils import extract_title, format_chinese_text, split_for_speech

logger = logging.getLogger(__name__)

# Regex pattern for illegal control characters (except tab, newline, carriage return)
ILLEGAL_CHARS = re.compile(r'[\x00-\x08\x0b\x0c\x0e-\x1f]')


def sanitize_text(text: str) -> str:
    """Remove control characters that may interfere with CSV/Excel.

    Args:
        text: Input text

    Returns:
        Sanitized text
    """
    if not text:
        return text
    return ILLEGAL_CHARS.sub('', text)


def mark_text(
    text: str,
    lexicon: Lexicon,
    settings: Optional[SegmentationConfig] = None,
) -> str:
    """Insert breath marks into raw text.

    Runs the five stages in order: punctuation pre-break, sentence
    extraction, long-sentence split, short-segment merge and final
    normalization.

    Args:
        text: Raw multi-line text
        lexicon: Dictionary snapshot
        settings: Length limits (defaults when omitted)

    Returns:
        Text with breath marks
    """
    settings = settings or SegmentationConfig()
    if settings.format_input:
        text = format_chinese_text(text)

    with_breaks = add_punctuation_breaks(text)
    sentences = extract_sentences(with_breaks)
    long_processed = split_long_sentences(
        with_breaks,
        sentences,
        lexicon,
        max_length=settings.max_length,
        min_length=settings.min_length,
        max_depth=settings.max_recursion_depth,
    )
    short_processed = merge_short_segments(long_processed, settings.min_length)
    return finalize_marks(short_processed)


def read_notes(input_path: Path) -> list[NoteRecord]:
    """Read notes from a JSONL file, or a whole text file as one note.

    JSONL lines that are not valid JSON objects, or have no content, are
    skipped. Notes without a title are named after their first sentence.
    """
    if input_path.suffix.lower() != ".jsonl":
        content = input_path.read_text(encoding="utf-8")
        return [NoteRecord(note_id=input_path.stem, title=input_path.stem, content=content, line_number=1)]

    notes = []
    with open(input_path, "r", encoding="utf-8") as infile:
        for line_num, line in enumerate(infile, 1):
            line = line.strip()
            if not line:
                continue
            try:
                record = json.loads(line)
            except json.JSONDecodeError:
                logger.warning("Skipping line %d: invalid JSON", line_num)
                continue
            if not isinstance(record, dict):
                continue
            content = record.get("content") or record.get("text") or ""
            if not content:
                continue
            notes.append(
                NoteRecord(
                    note_id=str(record.get("id", line_num)),
                    title=str(record.get("title") or "").strip() or extract_title(content),
                    content=content,
                    line_number=line_num,
                )
            )
    return notes


class BreathMarkPipeline:
    """Pipeline adding breath marks to notes."""

    def __init__(
        self,
        config: Optional[Config] = None,
        dictionary: Optional[DictionaryService] = None,
    ):
        """Initialize breath-mark pipeline.

        Args:
            config: Pipeline configuration
            dictionary: Dictionary service (built from the config when omitted)
        """
        self.config = config or Config()
        self.dictionary = dictionary or DictionaryService.from_config(self.config.dictionary)

    async def process_text(self, text: str) -> str:
        """Mark a single text with breath marks.

        Args:
            text: Raw note content

        Returns:
            Marked text
        """
        lexicon = await self.dictionary.load_lexicon()
        return mark_text(text, lexicon, self.config.segmentation)

    async def process_note(self, note: NoteRecord) -> MarkingResult:
        """Mark a note, keeping its original content if marking fails."""
        try:
            marked = await self.process_text(note.content)
        except Exception as e:
            logger.exception("Marking failed for note %s", note.note_id)
            return MarkingResult(
                note=note,
                marked_text=note.content,
                segment_count=0,
                error=str(e),
            )
        return MarkingResult(
            note=note,
            marked_text=marked,
            segment_count=len(split_for_speech(marked)),
        )

    async def process_notes(self, notes: list[NoteRecord]) -> list[MarkingResult]:
        """Mark notes one after another, in input order."""
        results = []
        for note in tqdm(notes, desc="Adding breath marks"):
            results.append(await self.process_note(note))
        return results

    def _write_results(self, results: list[MarkingResult], output_path: Path) -> None:
        rows = [
            {
                "Note_ID": result.note.note_id,
                "Title": result.note.title,
                "Source_Line_Number": result.note.line_number,
                "Marked_Text": result.marked_text,
                "Segment_Count": result.segment_count,
                "Error": result.error or "",
            }
            for result in results
        ]
        df = pd.DataFrame(rows)
        text_columns = [
            col for col in df.columns
            if pd.api.types.is_object_dtype(df[col]) or pd.api.types.is_string_dtype(df[col])
        ]
        for col in text_columns:
            df[col] = df[col].apply(
                lambda x: sanitize_text(x) if isinstance(x, str) else x
            )
        output_path.parent.mkdir(parents=True, exist_ok=True)
        if self.config.output.format == "jsonl":
            df.to_json(output_path, orient="records", lines=True, force_ascii=False)
        else:
            df.to_csv(output_path, index=False)

    def output_path_for(self, input_path: Path) -> Path:
        suffix = ".jsonl" if self.config.output.format == "jsonl" else ".csv"
        return self.config.output.output_dir / f"{input_path.stem}_marked{suffix}"

    async def process_file(self, input_path: Path) -> int:
        """Mark every note of a file and write the result table.

        Args:
            input_path: Path to a JSONL file of notes, or a plain text file

        Returns:
            Number of notes processed
        """
        logger.info("Reading from: %s", input_path)
        notes = read_notes(input_path)
        results = await self.process_notes(notes)

        output_path = self.output_path_for(input_path)
        self._write_results(results, output_path)

        failed = sum(1 for result in results if result.error)
        if failed:
            logger.warning("%d notes kept their original text after errors", failed)
        logger.info("Marked notes saved in: %s", output_path)
        return len(results)

    def run(self) -> int:
        """Run the pipeline on the configured input file.

        Returns:
            Number of notes processed
        """
        if not self.config.input_file:
            raise ValueError("Input file not specified in configuration")

        if not self.config.input_file.exists():
            raise FileNotFoundError(f"Input file not found: {self.config.input_file}")

        return asyncio.run(self.process_file(self.config.input_file))
