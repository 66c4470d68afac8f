"""Command-line interface for the breath-mark pipeline."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from .config import Config, SegmentationConfig
from .data.dict_io import DictionaryImportError, export_to_file, import_from_file
from .dictionary import CATEGORY_IDS, DictionaryService
from .pipeline import BreathMarkPipeline
from .stages import annotate_boundaries

COMMANDS = ("mark", "boundaries", "dict")


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the CLI."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="breathmarks",
        description="Insert breath marks (▼) into Chinese text for read-along practice",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Using a config file
  breathmarks --config config.yaml

  # Mark a JSONL file of notes
  breathmarks mark --input notes.jsonl --output data/marked

  # Mark a short text directly
  breathmarks mark --text "今天天气很好。"

  # Show every word boundary the dictionary rules allow
  breathmarks boundaries --text "我们一起去北京大学参观"

  # Back up and restore dictionary edits
  breathmarks dict export --file dict_export.json --store overrides.json
  breathmarks dict import --file dict_export.json --store overrides.json
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    mark_parser = subparsers.add_parser("mark", help="Add breath marks to text")
    setup_mark_parser(mark_parser)

    boundaries_parser = subparsers.add_parser(
        "boundaries", help="Show allowed word boundaries of a text"
    )
    setup_boundaries_parser(boundaries_parser)

    dict_parser = subparsers.add_parser("dict", help="Manage dictionary overrides")
    setup_dict_parser(dict_parser)

    # If no command specified, treat as mark command
    argv = list(sys.argv[1:] if argv is None else argv)
    if not argv or argv[0] not in COMMANDS + ("-h", "--help"):
        argv = ["mark"] + argv

    return parser.parse_args(argv)


def add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to YAML configuration file",
    )
    parser.add_argument(
        "--store",
        type=Path,
        help="JSON file holding dictionary overrides",
    )
    parser.add_argument(
        "--dict-dir",
        type=Path,
        help="Directory with default word lists (<category>.txt)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )


def setup_mark_parser(parser: argparse.ArgumentParser) -> None:
    """Setup arguments for mark command."""
    add_common_arguments(parser)

    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--input",
        type=Path,
        help="Path to input JSONL file of notes, or a plain text file",
    )
    source.add_argument(
        "--text",
        type=str,
        help="Mark this text and print the result",
    )
    parser.add_argument(
        "--output",
        type=Path,
        help="Output directory for marked files",
    )
    parser.add_argument(
        "--format",
        choices=["csv", "jsonl"],
        dest="output_format",
        help="Output table format (default: csv)",
    )
    parser.add_argument(
        "--max-length",
        type=int,
        help="Split sentences longer than this (default: 20)",
    )
    parser.add_argument(
        "--min-length",
        type=int,
        help="Merge segments shorter than this (default: 6)",
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        help="Recursion cap of the word split (default: 3)",
    )
    parser.add_argument(
        "--format-input",
        action="store_true",
        help="Tidy punctuation and spacing before marking",
    )


def setup_boundaries_parser(parser: argparse.ArgumentParser) -> None:
    """Setup arguments for boundaries command."""
    add_common_arguments(parser)
    parser.add_argument(
        "--text",
        type=str,
        required=True,
        help="Text to segment",
    )
    parser.add_argument(
        "--separator",
        type=str,
        default="|",
        help="Separator printed at allowed boundaries (default: |)",
    )


def setup_dict_parser(parser: argparse.ArgumentParser) -> None:
    """Setup arguments for dict command."""
    add_common_arguments(parser)
    parser.add_argument(
        "action",
        choices=["export", "import", "reset"],
        help="Dictionary operation",
    )
    parser.add_argument(
        "--file",
        type=Path,
        help="Dictionary JSON document to export to or import from",
    )
    parser.add_argument(
        "--category",
        choices=CATEGORY_IDS,
        help="Category to reset (default: all)",
    )


def build_config(args: argparse.Namespace) -> Config:
    """Build configuration from arguments."""
    # Start with config file if provided
    if getattr(args, "config", None):
        config = Config.from_yaml(args.config)
    else:
        config = Config()

    if getattr(args, "input", None):
        config.input_file = args.input
    if getattr(args, "output", None):
        config.output.output_dir = args.output
    if getattr(args, "output_format", None):
        config.output.format = args.output_format

    if getattr(args, "store", None):
        config.dictionary.override_path = args.store
    if getattr(args, "dict_dir", None):
        config.dictionary.default_dir = args.dict_dir

    # Segmentation config overrides, validated as a whole
    segmentation = config.segmentation.model_dump()
    if getattr(args, "max_length", None) is not None:
        segmentation["max_length"] = args.max_length
    if getattr(args, "min_length", None) is not None:
        segmentation["min_length"] = args.min_length
    if getattr(args, "max_depth", None) is not None:
        segmentation["max_recursion_depth"] = args.max_depth
    if getattr(args, "format_input", False):
        segmentation["format_input"] = True
    config.segmentation = SegmentationConfig.model_validate(segmentation)

    return config


def handle_mark(args: argparse.Namespace) -> int:
    """Handle mark command."""
    try:
        config = build_config(args)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    pipeline = BreathMarkPipeline(config)

    if getattr(args, "text", None) is not None:
        print(asyncio.run(pipeline.process_text(args.text)))
        return 0

    if not config.input_file:
        print("Error: Input is required (use --input, --text or --config)", file=sys.stderr)
        return 1

    try:
        note_count = pipeline.run()
        print(f"\nProcessed {note_count} notes")
        return 0
    except FileNotFoundError as e:
        print(f"Error: File not found - {e}", file=sys.stderr)
        return 1
    except Exception as e:
        logging.exception("Marking failed")
        print(f"Error: {e}", file=sys.stderr)
        return 1


def handle_boundaries(args: argparse.Namespace) -> int:
    """Handle boundaries command."""
    try:
        config = build_config(args)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    service = DictionaryService.from_config(config.dictionary)
    lexicon = asyncio.run(service.load_lexicon())
    print(annotate_boundaries(args.text, lexicon, args.separator))
    return 0


def handle_dict(args: argparse.Namespace) -> int:
    """Handle dict command."""
    try:
        config = build_config(args)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    service = DictionaryService.from_config(config.dictionary)

    if args.action == "reset":
        if not config.dictionary.override_path:
            print("Error: --store is required to reset saved words", file=sys.stderr)
            return 1
        if args.category:
            service.reset(args.category)
        else:
            service.reset_all()
        print(f"Reset {args.category or 'all categories'} to defaults")
        return 0

    if not args.file:
        print(f"Error: --file is required for dict {args.action}", file=sys.stderr)
        return 1

    if args.action == "export":
        path = asyncio.run(export_to_file(service, args.file))
        print(f"Exported dictionaries to {path}")
        return 0

    if not config.dictionary.override_path:
        print("Error: --store is required to keep imported words", file=sys.stderr)
        return 1
    try:
        count = import_from_file(service, args.file)
    except DictionaryImportError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    print(f"Imported {count} categories")
    return 0


def main(argv=None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    setup_logging(getattr(args, "verbose", False))

    if args.command == "boundaries":
        return handle_boundaries(args)
    if args.command == "dict":
        return handle_dict(args)
    return handle_mark(args)


if __name__ == "__main__":
    sys.exit(main())
