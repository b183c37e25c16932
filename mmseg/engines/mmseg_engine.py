"""MMSEG segmentation engine."""

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Literal, Union

from ..dictionary import Dictionary
from ..errors import InternalConsistencyError
from ..models import Token
from ..utils.char_classes import CJK, classify, find_run_end
from ..utils.text import decode_text
from .base import SegmentationEngine
from .chunks import ChunkGenerator
from .rules import RuleEngine

logger = logging.getLogger(__name__)

SegmentationMode = Literal["complex", "simple"]


@dataclass
class Cursor:
    """Scan position and the class of the run being scanned."""

    position: int = 0
    mode: str = CJK

    def advance(self, length: int) -> None:
        if length <= 0:
            raise InternalConsistencyError(f"Cursor cannot advance by {length}")
        self.position += length


class MMSegSegmenter(SegmentationEngine):
    """Dictionary-driven segmenter using the MMSEG chunk rules.

    CJK runs are segmented word by word: candidate chunks are generated at
    the cursor, the rule engine picks one, and only its first word is
    emitted. Other runs (digits, letters, whitespace) pass through as one
    token each, and every remaining character is a token of its own.
    """

    def __init__(
        self,
        dictionary: Dictionary,
        mode: SegmentationMode = "complex",
        encoding: str = "utf-8",
    ):
        """Initialize MMSEG segmenter.

        Args:
            dictionary: Shared read-only dictionary
            mode: "complex" for three-word chunks and all four rules,
                "simple" for forward maximum matching
            encoding: Encoding used to decode bytes input
        """
        super().__init__(encoding)
        if mode not in ("complex", "simple"):
            raise ValueError(f"Unknown segmentation mode: {mode}")
        self.dictionary = dictionary
        self.mode = mode
        simple = mode == "simple"
        self.chunk_generator = ChunkGenerator(max_words=1 if simple else 3)
        self.rule_engine = RuleEngine(dictionary, simple=simple)

    def segment(self, text: Union[str, bytes]) -> Iterator[Token]:
        """Segment text into a lazy sequence of tokens.

        The input is validated before the iterator is returned. Every call
        scans from a fresh cursor, so the result can be restarted and
        abandoned at any point.

        Raises:
            DecodingError: If the input is not a valid character sequence
        """
        chars = decode_text(text, self.encoding)
        logger.debug("Segmenting %d characters (%s mode)", len(chars), self.mode)
        return self._scan(chars)

    def _scan(self, chars: str) -> Iterator[Token]:
        cursor = Cursor()
        while cursor.position < len(chars):
            run_end = find_run_end(chars, cursor.position)
            cursor.mode = classify(chars[cursor.position])
            if cursor.mode == CJK:
                while cursor.position < run_end:
                    token = self._next_word(chars, cursor.position, run_end)
                    yield token
                    cursor.advance(token.length)
            else:
                yield Token(
                    text=chars[cursor.position : run_end],
                    start=cursor.position,
                    end=run_end,
                    kind=cursor.mode,
                )
                cursor.advance(run_end - cursor.position)

    def _next_word(self, chars: str, position: int, run_end: int) -> Token:
        chunks = self.chunk_generator.generate(chars, position, self.dictionary, run_end)
        if not chunks:
            raise InternalConsistencyError(
                f"No chunks generated at offset {position} with text remaining"
            )
        word = self.rule_engine.select(chunks).first_word
        return Token(text=word.text, start=word.start, end=word.end, kind=CJK)


def segment(
    text: Union[str, bytes],
    dictionary: Dictionary,
    mode: SegmentationMode = "complex",
) -> Iterator[Token]:
    """Segment text with a new MMSEG segmenter over ``dictionary``."""
    return MMSegSegmenter(dictionary, mode=mode).segment(text)
