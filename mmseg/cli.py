"""Command-line interface for the segmentation pipeline."""

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from .config import Config
from .data import load_dictionary
from .engines import MMSegSegmenter
from .errors import MMSegError
from .pipeline import SegmentationPipeline


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the CLI."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="mmseg",
        description="Segment Chinese text into words with the MMSEG algorithm",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Using a config file
  mmseg segment --config config.yaml

  # Direct arguments
  mmseg segment --input corpus.txt --output tokens.txt --words words.dic --chars chars.dic

  # CSV output using four worker processes
  mmseg segment --input corpus.jsonl --input-format jsonl --format csv --workers 4

  # Segment a string
  mmseg cut "研究生命的起源" --words words.dic
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    segment_parser = subparsers.add_parser("segment", help="Segment a text file")
    setup_segment_parser(segment_parser)

    cut_parser = subparsers.add_parser("cut", help="Segment text given on the command line")
    setup_cut_parser(cut_parser)

    return parser


def add_dictionary_arguments(parser: argparse.ArgumentParser) -> None:
    """Add dictionary and engine options shared by all commands."""
    parser.add_argument(
        "--words",
        type=Path,
        help="Words dictionary with '<length> <word>' lines",
    )
    parser.add_argument(
        "--chars",
        type=Path,
        help="Chars dictionary with '<frequency> <char>' lines",
    )
    parser.add_argument(
        "--word-list",
        type=Path,
        action="append",
        help="Plain word list, one word per line (repeatable)",
    )
    parser.add_argument(
        "--max-word-length",
        type=int,
        help="Longest dictionary word to try (default: longest loaded word)",
    )
    parser.add_argument(
        "--mode",
        choices=["complex", "simple"],
        help="Segmentation mode (default: complex)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )


def setup_segment_parser(parser: argparse.ArgumentParser) -> None:
    """Setup arguments for segment command."""
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to YAML configuration file",
    )
    parser.add_argument(
        "--input",
        type=Path,
        help="Path to input file",
    )
    parser.add_argument(
        "--input-format",
        choices=["text", "jsonl"],
        help="Input format (default: text)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        help="Path to output file",
    )
    parser.add_argument(
        "--format",
        choices=["text", "jsonl", "csv"],
        help="Output format (default: text)",
    )
    parser.add_argument(
        "--delimiter",
        help="Token delimiter for text output (default: space)",
    )
    parser.add_argument(
        "--drop-separators",
        action="store_true",
        help="Drop whitespace and punctuation tokens from the output",
    )
    parser.add_argument(
        "--workers",
        type=int,
        help="Number of parallel workers (default: 1)",
    )
    add_dictionary_arguments(parser)


def setup_cut_parser(parser: argparse.ArgumentParser) -> None:
    """Setup arguments for cut command."""
    parser.add_argument("text", help="Text to segment")
    parser.add_argument(
        "--delimiter",
        default=" / ",
        help="Token delimiter (default: ' / ')",
    )
    parser.add_argument(
        "--keep-separators",
        action="store_true",
        help="Keep whitespace and punctuation tokens",
    )
    add_dictionary_arguments(parser)


def build_config(args: argparse.Namespace) -> Config:
    """Build configuration from arguments."""
    if getattr(args, "config", None):
        config = Config.from_yaml(args.config)
    else:
        config = Config()

    if getattr(args, "input", None):
        config.input_file = args.input
    if getattr(args, "input_format", None):
        config.input_format = args.input_format
    if getattr(args, "output", None):
        config.output.output_file = args.output
    if getattr(args, "format", None):
        config.output.format = args.format
    if getattr(args, "delimiter", None) is not None:
        config.output.delimiter = args.delimiter

    if args.words:
        config.dictionary.words_file = args.words
    if args.chars:
        config.dictionary.chars_file = args.chars
    if args.word_list:
        config.dictionary.word_list_files = args.word_list
    if args.max_word_length is not None:
        config.dictionary.max_word_length = args.max_word_length

    if args.mode:
        config.segmentation.mode = args.mode
    if getattr(args, "drop_separators", False):
        config.segmentation.keep_separators = False
    if getattr(args, "workers", None) is not None:
        config.segmentation.workers = args.workers

    # Re-validate the overridden fields
    return Config.model_validate(config.model_dump())


def handle_segment(args: argparse.Namespace) -> int:
    """Handle segment command."""
    try:
        config = build_config(args)
    except (ValueError, ValidationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not config.input_file:
        print("Error: Input file is required (use --input or --config)", file=sys.stderr)
        return 1

    try:
        pipeline = SegmentationPipeline(config)
        line_count = pipeline.run()
    except FileNotFoundError as e:
        print(f"Error: File not found - {e}", file=sys.stderr)
        return 1
    except MMSegError as e:
        logging.exception("Segmentation failed")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Processed {line_count} lines")
    return 0


def handle_cut(args: argparse.Namespace) -> int:
    """Handle cut command."""
    try:
        config = build_config(args)
        dictionary = load_dictionary(
            words_file=config.dictionary.words_file,
            chars_file=config.dictionary.chars_file,
            word_list_files=config.dictionary.word_list_files,
            max_word_length=config.dictionary.max_word_length,
        )
    except (ValueError, ValidationError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    segmenter = MMSegSegmenter(dictionary, mode=config.segmentation.mode)
    try:
        tokens = segmenter.cut(args.text, keep_separators=args.keep_separators)
    except MMSegError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    print(args.delimiter.join(tokens))
    return 0


def main(argv=None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        return 1

    setup_logging(args.verbose)

    if args.command == "cut":
        return handle_cut(args)
    return handle_segment(args)


if __name__ == "__main__":
    sys.exit(main())
