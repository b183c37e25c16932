"""Dictionary loading."""

from .loader import (
    load_dictionary,
    parse_chars_dict,
    parse_word_list,
    parse_words_dict,
)

__all__ = [
    "load_dictionary",
    "parse_chars_dict",
    "parse_word_list",
    "parse_words_dict",
]
