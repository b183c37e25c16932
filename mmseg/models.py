"""Data models for the segmentation engine."""

from dataclasses import dataclass
from fractions import Fraction
from typing import Literal

TokenKind = Literal["cjk", "digit", "letter", "whitespace", "punctuation"]


@dataclass(frozen=True)
class Word:
    """A candidate word spanning ``[start, end)`` of the character sequence."""

    text: str
    start: int

    @property
    def length(self) -> int:
        return len(self.text)

    @property
    def end(self) -> int:
        return self.start + len(self.text)


@dataclass(frozen=True)
class Chunk:
    """One to three consecutive words starting at the same cursor position.

    The score properties back the MMSEG filters and are exact rationals so
    that equal scores compare equal.
    """

    words: tuple[Word, ...]

    def __post_init__(self):
        if not 1 <= len(self.words) <= 3:
            raise ValueError(f"A chunk holds 1 to 3 words, got {len(self.words)}")
        for previous, word in zip(self.words, self.words[1:]):
            if previous.end != word.start:
                raise ValueError(
                    f"Chunk words must be contiguous: {previous.end} != {word.start}"
                )

    @property
    def start(self) -> int:
        return self.words[0].start

    @property
    def end(self) -> int:
        return self.words[-1].end

    @property
    def lengths(self) -> tuple[int, ...]:
        return tuple(word.length for word in self.words)

    @property
    def total_length(self) -> int:
        return sum(self.lengths)

    @property
    def average_length(self) -> Fraction:
        return Fraction(self.total_length, len(self.words))

    @property
    def variance(self) -> Fraction:
        """Population variance of the word lengths."""
        mean = self.average_length
        return sum((length - mean) ** 2 for length in self.lengths) / len(self.words)

    @property
    def first_word(self) -> Word:
        return self.words[0]

    def __str__(self) -> str:
        return "_".join(word.text for word in self.words)


@dataclass(frozen=True)
class Token:
    """An emitted output unit covering ``[start, end)`` of the input."""

    text: str
    start: int
    end: int
    kind: TokenKind = "cjk"

    @property
    def length(self) -> int:
        return self.end - self.start

    def as_tuple(self) -> tuple[str, int, int]:
        return (self.text, self.start, self.end)
