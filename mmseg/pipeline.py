"""Main segmentation pipeline."""

import json
import logging
from concurrent.futures import ProcessPoolExecutor
from pathlib import Path
from typing import Optional

import pandas as pd
from tqdm import tqdm

from .config import Config
from .data import load_dictionary
from .dictionary import Dictionary
from .engines import MMSegSegmenter
from .engines.base import SEPARATOR_KINDS
from .errors import DecodingError
from .models import Token
from .utils.text import decode_text

logger = logging.getLogger(__name__)

# Segmenter of the current worker process
_worker_segmenter: Optional[MMSegSegmenter] = None


def _init_worker(dictionary: Dictionary, mode: str, encoding: str) -> None:
    """Build the per-process segmenter. Must be module-level for pickling."""
    global _worker_segmenter
    _worker_segmenter = MMSegSegmenter(dictionary, mode=mode, encoding=encoding)


def _segment_line_worker(args: tuple[int, str]) -> tuple[int, list[Token]]:
    """Worker for parallel processing.

    Args:
        args: (line_num, text)

    Returns:
        (line_num, tokens)
    """
    line_num, text = args
    return line_num, list(_worker_segmenter.segment(text))


class SegmentationPipeline:
    """Segments an input file line by line and writes the tokens out."""

    def __init__(self, config: Config, dictionary: Optional[Dictionary] = None):
        """Initialize pipeline.

        Args:
            config: Pipeline configuration
            dictionary: Prebuilt dictionary, loaded from the configured
                files when omitted
        """
        self.config = config
        if dictionary is None:
            dictionary = load_dictionary(
                words_file=config.dictionary.words_file,
                chars_file=config.dictionary.chars_file,
                word_list_files=config.dictionary.word_list_files,
                max_word_length=config.dictionary.max_word_length,
            )
        self.dictionary = dictionary
        self.segmenter = MMSegSegmenter(
            dictionary,
            mode=config.segmentation.mode,
            encoding=config.segmentation.encoding,
        )

    def read_lines(self, input_path: Path) -> list[tuple[int, str]]:
        """Read the non-empty input lines.

        Text input yields each line without its line break. JSONL input
        yields the ``text`` (or ``content``) field of each record; lines that
        are not valid JSON are skipped.

        Returns:
            List of (line_number, text) tuples

        Raises:
            DecodingError: If a line is not valid in the configured encoding
        """
        encoding = self.config.segmentation.encoding
        lines = []
        with open(input_path, "rb") as infile:
            for line_num, raw in enumerate(infile, 1):
                try:
                    line = decode_text(raw, encoding).rstrip("\r\n")
                except DecodingError as e:
                    raise DecodingError(f"{input_path}:{line_num}: {e}") from e
                if not line.strip():
                    continue
                if self.config.input_format == "jsonl":
                    try:
                        record = json.loads(line)
                    except json.JSONDecodeError:
                        logger.warning("Skipping invalid JSON at line %d", line_num)
                        continue
                    if not isinstance(record, dict):
                        logger.warning("Skipping non-object JSON at line %d", line_num)
                        continue
                    line = record.get("text") or record.get("content") or ""
                    if not isinstance(line, str):
                        logger.warning("Skipping non-string text at line %d", line_num)
                        continue
                    if not line:
                        continue
                lines.append((line_num, line))
        return lines

    def process_line(self, text: str) -> list[Token]:
        """Segment a single line of text."""
        return list(self.segmenter.segment(text))

    def _output_tokens(self, tokens: list[Token]) -> list[Token]:
        if self.config.segmentation.keep_separators:
            return tokens
        return [token for token in tokens if token.kind not in SEPARATOR_KINDS]

    def _process_sequential(self, lines: list[tuple[int, str]]) -> dict[int, list[Token]]:
        results = {}
        desc_text = f"MMSEG {self.config.segmentation.mode.title()} Processing"
        for line_num, text in tqdm(lines, desc=desc_text):
            results[line_num] = self.process_line(text)
        return results

    def _process_parallel(self, lines: list[tuple[int, str]]) -> dict[int, list[Token]]:
        workers = self.config.segmentation.workers
        desc_text = (
            f"MMSEG {self.config.segmentation.mode.title()} Processing ({workers} workers)"
        )
        results = {}
        with ProcessPoolExecutor(
            max_workers=workers,
            initializer=_init_worker,
            initargs=(
                self.dictionary,
                self.config.segmentation.mode,
                self.config.segmentation.encoding,
            ),
        ) as executor:
            for line_num, tokens in tqdm(
                executor.map(_segment_line_worker, lines, chunksize=64),
                total=len(lines),
                desc=desc_text,
            ):
                results[line_num] = tokens
        return results

    def write_output(self, results: dict[int, list[Token]], output_path: Path) -> None:
        """Write segmented lines in the configured format, in line order."""
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_format = self.config.output.format
        ordered = [(line_num, self._output_tokens(results[line_num])) for line_num in sorted(results)]

        if output_format == "csv":
            rows = [
                {
                    "Source_Line_Number": line_num,
                    "Token_Order": order,
                    "Token": token.text,
                    "Start_Index": token.start,
                    "End_Index": token.end,
                    "Kind": token.kind,
                }
                for line_num, tokens in ordered
                for order, token in enumerate(tokens, 1)
            ]
            columns = [
                "Source_Line_Number",
                "Token_Order",
                "Token",
                "Start_Index",
                "End_Index",
                "Kind",
            ]
            pd.DataFrame(rows, columns=columns).to_csv(output_path, index=False)
            return

        with open(output_path, "w", encoding="utf-8") as outfile:
            for line_num, tokens in ordered:
                if output_format == "jsonl":
                    record = {
                        "line": line_num,
                        "tokens": [
                            {"text": token.text, "start": token.start, "end": token.end}
                            for token in tokens
                        ],
                    }
                    outfile.write(json.dumps(record, ensure_ascii=False) + "\n")
                else:
                    delimiter = self.config.output.delimiter
                    outfile.write(delimiter.join(token.text for token in tokens) + "\n")

    def process_file(self, input_path: Path) -> int:
        """Segment an input file and write the output file.

        Args:
            input_path: Path to input file

        Returns:
            Number of lines processed
        """
        logger.info("Reading from: %s", input_path)
        lines = self.read_lines(input_path)

        if self.config.segmentation.workers <= 1 or len(lines) <= 1:
            results = self._process_sequential(lines)
        else:
            results = self._process_parallel(lines)

        output_path = self.config.output.output_file
        self.write_output(results, output_path)
        logger.info("Wrote %d lines to %s", len(results), output_path)
        return len(results)

    def run(self) -> int:
        """Run the segmentation pipeline.

        Returns:
            Number of lines processed
        """
        if not self.config.input_file:
            raise ValueError("Input file not specified in configuration")

        if not self.config.input_file.exists():
            raise FileNotFoundError(f"Input file not found: {self.config.input_file}")

        return self.process_file(self.config.input_file)
