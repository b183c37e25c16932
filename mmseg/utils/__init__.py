"""Utility functions."""

from .char_classes import classify, find_run_end, is_cjk
from .text import decode_text

__all__ = [
    "classify",
    "find_run_end",
    "is_cjk",
    "decode_text",
]
