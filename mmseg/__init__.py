"""MMSEG - Dictionary-based Chinese word segmentation."""

__version__ = "0.1.0"

from .dictionary import Dictionary
from .engines import ChunkGenerator, MMSegSegmenter, RuleEngine, segment
from .errors import DecodingError, DictionaryFormatError, InternalConsistencyError, MMSegError
from .models import Chunk, Token, Word

__all__ = [
    "Dictionary",
    "ChunkGenerator",
    "MMSegSegmenter",
    "RuleEngine",
    "segment",
    "DecodingError",
    "DictionaryFormatError",
    "InternalConsistencyError",
    "MMSegError",
    "Chunk",
    "Token",
    "Word",
]
