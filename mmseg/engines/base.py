"""Base class for segmentation engines."""

from abc import ABC, abstractmethod
from collections.abc import Iterator
from typing import Union

from ..models import Token
from ..utils.char_classes import PUNCTUATION, WHITESPACE

# Token kinds dropped by ``cut`` unless separators are kept
SEPARATOR_KINDS = frozenset({WHITESPACE, PUNCTUATION})


class SegmentationEngine(ABC):
    """Base class for segmentation engines."""

    def __init__(self, encoding: str = "utf-8"):
        """Initialize segmentation engine.

        Args:
            encoding: Encoding used to decode bytes input
        """
        self.encoding = encoding

    @abstractmethod
    def segment(self, text: Union[str, bytes]) -> Iterator[Token]:
        """Segment text into a lazy sequence of tokens.

        Args:
            text: Input text to segment

        Returns:
            Iterator over tokens covering the input exactly once
        """

    def segment_with_indices(self, text: Union[str, bytes]) -> list[tuple[str, int, int]]:
        """Segment text and return tokens with their indices.

        Args:
            text: Input text to segment

        Returns:
            List of (token_text, start_index, end_index) tuples
        """
        return [token.as_tuple() for token in self.segment(text)]

    def cut(self, text: Union[str, bytes], keep_separators: bool = False) -> list[str]:
        """Segment text into a list of token strings.

        Args:
            text: Input text to segment
            keep_separators: Keep whitespace and punctuation tokens

        Returns:
            Token texts in input order
        """
        return [
            token.text
            for token in self.segment(text)
            if keep_separators or token.kind not in SEPARATOR_KINDS
        ]
