"""Immutable word dictionary with per-character freedom statistics."""

import logging
import math
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_MAX_WORD_LENGTH = 3


class Dictionary:
    """Read-only word lookup used by the chunk generator.

    The dictionary is built once from a collection of words and an optional
    table of single-character freedom scores. It never changes afterwards, so
    a single instance can be shared by any number of segmenters.
    """

    __slots__ = ("_words", "_freedom", "_max_word_length")

    def __init__(
        self,
        words: Iterable[str] = (),
        freedom: Optional[Mapping[str, float]] = None,
        max_word_length: Optional[int] = None,
    ):
        """Build a dictionary.

        Args:
            words: Words to recognise. Empty strings are ignored.
            freedom: Optional mapping from single character to a non-negative
                degree of morphemic freedom.
            max_word_length: Longest word the generator will try. Defaults to
                the longest word supplied (at least 1).

        Raises:
            ValueError: If ``max_word_length`` is below 1 or the freedom table
                has a multi-character key or a negative score.
        """
        word_set = frozenset(word for word in words if word)

        table = {}
        for char, score in (freedom or {}).items():
            if len(char) != 1:
                raise ValueError(f"Freedom keys must be single characters: {char!r}")
            score = float(score)
            if not math.isfinite(score) or score < 0:
                raise ValueError(
                    f"Freedom score for {char!r} must be a finite non-negative number: {score}"
                )
            table[char] = score

        if max_word_length is None:
            max_word_length = max((len(word) for word in word_set), default=1)
        if max_word_length < 1:
            raise ValueError(f"max_word_length must be >= 1, got {max_word_length}")

        object.__setattr__(self, "_words", word_set)
        object.__setattr__(self, "_freedom", MappingProxyType(table))
        object.__setattr__(self, "_max_word_length", int(max_word_length))

        logger.debug(
            "Built dictionary with %d words, %d freedom entries, max word length %d",
            len(word_set),
            len(table),
            max_word_length,
        )

    def __setattr__(self, name, value):
        raise AttributeError("Dictionary is immutable")

    def __delattr__(self, name):
        raise AttributeError("Dictionary is immutable")

    def __reduce__(self):
        return (
            self.__class__,
            (self._words, dict(self._freedom), self._max_word_length),
        )

    @property
    def max_word_length(self) -> int:
        return self._max_word_length

    @property
    def words(self) -> frozenset:
        return self._words

    def contains(self, word: str) -> bool:
        return word in self._words

    def freedom(self, char: str) -> float:
        """Return the freedom score of ``char``, or 0.0 when unknown."""
        return self._freedom.get(char, 0.0)

    def __contains__(self, word) -> bool:
        return word in self._words

    def __len__(self) -> int:
        return len(self._words)

    def __repr__(self) -> str:
        return (
            f"Dictionary(words={len(self._words)}, "
            f"freedom={len(self._freedom)}, max_word_length={self._max_word_length})"
        )
