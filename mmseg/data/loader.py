"""Dictionary file loading."""

import logging
import math
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Optional

from ..dictionary import Dictionary
from ..errors import DictionaryFormatError

logger = logging.getLogger(__name__)


def _entries(lines: Iterable[str]) -> Iterator[tuple[int, str, list[str]]]:
    """Yield (line_number, line, fields), skipping blank and comment lines."""
    for line_number, line in enumerate(lines, 1):
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        yield line_number, line, line.split()


def char_freedom(frequency: int) -> float:
    """Degree of morphemic freedom derived from a character frequency.

    The log frequency of a character standing alone; frequencies of 0 or 1
    give 0.
    """
    return math.log(frequency) if frequency > 1 else 0.0


def parse_chars_dict(lines: Iterable[str], source="<chars>") -> dict[str, float]:
    """Parse ``<frequency> <char>`` lines into a freedom table.

    Args:
        lines: Lines of a chars dictionary
        source: Name used in error messages

    Returns:
        Mapping from character to freedom score

    Raises:
        DictionaryFormatError: If a line is malformed
    """
    freedom = {}
    for line_number, line, fields in _entries(lines):
        if len(fields) != 2:
            raise DictionaryFormatError(source, line_number, line, "expected '<frequency> <char>'")
        frequency, char = fields
        if not frequency.isdigit():
            raise DictionaryFormatError(source, line_number, line, "frequency is not a non-negative integer")
        if len(char) != 1:
            raise DictionaryFormatError(source, line_number, line, "expected a single character")
        freedom[char] = char_freedom(int(frequency))
    return freedom


def parse_words_dict(lines: Iterable[str], source="<words>") -> list[str]:
    """Parse ``<length> <word>`` lines into a word list.

    Raises:
        DictionaryFormatError: If a line is malformed
    """
    words = []
    for line_number, line, fields in _entries(lines):
        if len(fields) != 2:
            raise DictionaryFormatError(source, line_number, line, "expected '<length> <word>'")
        length, word = fields
        if not length.isdigit():
            raise DictionaryFormatError(source, line_number, line, "length is not an integer")
        if int(length) != len(word):
            logger.warning(
                "%s:%d: declared length %s does not match %r, using %d",
                source,
                line_number,
                length,
                word,
                len(word),
            )
        words.append(word)
    return words


def parse_word_list(lines: Iterable[str], source="<word list>") -> list[str]:
    """Parse one word per line, ignoring any trailing columns."""
    return [fields[0] for _, _, fields in _entries(lines)]


def _read_lines(path: Path) -> list[str]:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Dictionary file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        return f.readlines()


def load_dictionary(
    words_file: Optional[Path] = None,
    chars_file: Optional[Path] = None,
    word_list_files: Iterable[Path] = (),
    max_word_length: Optional[int] = None,
) -> Dictionary:
    """Build a Dictionary from dictionary files.

    Every character of the chars file is also a one-character word.

    Args:
        words_file: ``<length> <word>`` file
        chars_file: ``<frequency> <char>`` file supplying freedom scores
        word_list_files: Plain one-word-per-line files
        max_word_length: Longest word to try, defaults to the longest word

    Returns:
        Dictionary over all loaded words

    Raises:
        FileNotFoundError: If a file does not exist
        DictionaryFormatError: If a file is malformed
    """
    words = []
    freedom = {}
    if chars_file is not None:
        freedom = parse_chars_dict(_read_lines(chars_file), source=chars_file)
        words.extend(freedom)
        logger.info("Loaded %d characters from %s", len(freedom), chars_file)
    if words_file is not None:
        loaded = parse_words_dict(_read_lines(words_file), source=words_file)
        words.extend(loaded)
        logger.info("Loaded %d words from %s", len(loaded), words_file)
    for path in word_list_files:
        loaded = parse_word_list(_read_lines(path), source=path)
        words.extend(loaded)
        logger.info("Loaded %d words from %s", len(loaded), path)

    if not words:
        logger.warning("No dictionary words loaded, CJK text will be split per character")
    return Dictionary(words, freedom=freedom, max_word_length=max_word_length)
