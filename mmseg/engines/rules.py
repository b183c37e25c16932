"""The four MMSEG disambiguation rules."""

import math
from typing import Callable, NamedTuple

from ..dictionary import Dictionary
from ..errors import InternalConsistencyError
from ..models import Chunk


class Rule(NamedTuple):
    """A chunk filter keeping the chunks with the extremal score."""

    name: str
    score: Callable[[Chunk], float]
    prefer_max: bool


def total_length(chunk: Chunk):
    return chunk.total_length


def average_length(chunk: Chunk):
    return chunk.average_length


def length_variance(chunk: Chunk):
    return chunk.variance


def filter_chunks(chunks: list[Chunk], rule: Rule) -> list[Chunk]:
    """Keep the chunks that reach the rule's best score, in input order."""
    scores = [rule.score(chunk) for chunk in chunks]
    best = max(scores) if rule.prefer_max else min(scores)
    return [chunk for chunk, score in zip(chunks, scores) if score == best]


class RuleEngine:
    """Selects one chunk by applying the MMSEG filters in a fixed order.

    1. Maximum matching: largest total length.
    2. Largest average word length.
    3. Smallest variance of word lengths.
    4. Largest sum of degree of morphemic freedom of one-character words.

    Filtering stops as soon as one chunk remains. Chunks still tied after
    the last rule resolve to the one generated first.
    """

    def __init__(self, dictionary: Dictionary, simple: bool = False):
        """Initialize the rule engine.

        Args:
            dictionary: Source of the freedom scores used by rule 4
            simple: Apply only the maximum matching rule
        """
        self.dictionary = dictionary
        self.rules = [Rule("maximum_matching", total_length, True)]
        if not simple:
            self.rules.extend(
                [
                    Rule("largest_average_length", average_length, True),
                    Rule("smallest_variance", length_variance, False),
                    Rule("largest_freedom", self.morphemic_freedom, True),
                ]
            )

    def morphemic_freedom(self, chunk: Chunk) -> float:
        """Sum the freedom scores of the chunk's one-character words."""
        # fsum is correctly rounded, so equal multisets give equal sums
        return math.fsum(
            self.dictionary.freedom(word.text) for word in chunk.words if word.length == 1
        )

    def select(self, chunks: list[Chunk]) -> Chunk:
        """Return the winning chunk.

        Raises:
            InternalConsistencyError: If ``chunks`` is empty
        """
        if not chunks:
            raise InternalConsistencyError("No candidate chunks to select from")
        remaining = list(chunks)
        for rule in self.rules:
            if len(remaining) == 1:
                break
            remaining = filter_chunks(remaining, rule)
        return remaining[0]
