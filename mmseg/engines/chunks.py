"""Candidate chunk enumeration."""

from typing import Optional

from ..dictionary import Dictionary
from ..models import Chunk, Word

MAX_CHUNK_WORDS = 3


def match_words(
    chars: str, position: int, dictionary: Dictionary, end: Optional[int] = None
) -> list[Word]:
    """Return candidate words starting at ``position``, shortest first.

    The single character at ``position`` is always a candidate, longer spans
    only when the dictionary contains them.

    Args:
        chars: Character sequence
        position: Start offset of the words
        dictionary: Word lookup
        end: Offset the words may not cross (defaults to ``len(chars)``)

    Returns:
        Candidate words, empty when ``position`` is at ``end``
    """
    if end is None:
        end = len(chars)
    limit = min(dictionary.max_word_length, end - position)
    words = []
    for length in range(1, limit + 1):
        text = chars[position : position + length]
        if length == 1 or dictionary.contains(text):
            words.append(Word(text=text, start=position))
    return words


class ChunkGenerator:
    """Enumerates every chunk of up to three words at a cursor position."""

    def __init__(self, max_words: int = MAX_CHUNK_WORDS):
        if not 1 <= max_words <= MAX_CHUNK_WORDS:
            raise ValueError(f"max_words must be between 1 and 3, got {max_words}")
        self.max_words = max_words

    def generate(
        self,
        chars: str,
        position: int,
        dictionary: Dictionary,
        end: Optional[int] = None,
    ) -> list[Chunk]:
        """Build the candidate chunk set at ``position``.

        A chunk is extended until it holds ``max_words`` words or reaches
        ``end``. Chunks are returned in enumeration order (ascending first,
        second, then third word length) without duplicates.

        Args:
            chars: Character sequence
            position: Cursor offset
            dictionary: Word lookup
            end: Offset chunks may not cross (defaults to ``len(chars)``)

        Returns:
            Ordered list of chunks, empty when ``position`` is at ``end``
        """
        if end is None:
            end = len(chars)
        if position >= end:
            return []

        chunks = []
        self._extend(chars, position, dictionary, end, (), chunks, set())
        return chunks

    def _extend(self, chars, cursor, dictionary, end, words, chunks, seen):
        for word in match_words(chars, cursor, dictionary, end):
            chosen = words + (word,)
            if len(chosen) < self.max_words and word.end < end:
                self._extend(chars, word.end, dictionary, end, chosen, chunks, seen)
                continue
            key = tuple(w.length for w in chosen)
            if key not in seen:
                seen.add(key)
                chunks.append(Chunk(words=chosen))
