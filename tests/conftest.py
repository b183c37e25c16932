"""Shared fixtures."""

import pytest

from mmseg import Dictionary

CLASSIC_WORDS = ["研究", "研究生", "生命", "命", "的", "起源"]


@pytest.fixture
def classic_dictionary():
    """Dictionary of the classic 研究生命的起源 example."""
    return Dictionary(CLASSIC_WORDS)


@pytest.fixture
def word_list_file(tmp_path):
    """Plain word list holding the classic example words."""
    path = tmp_path / "words.txt"
    path.write_text("\n".join(CLASSIC_WORDS) + "\n", encoding="utf-8")
    return path
