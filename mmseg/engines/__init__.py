"""Segmentation engines."""

from .base import SegmentationEngine
from .chunks import ChunkGenerator
from .mmseg_engine import MMSegSegmenter, segment
from .rules import RuleEngine

__all__ = [
    "SegmentationEngine",
    "ChunkGenerator",
    "MMSegSegmenter",
    "RuleEngine",
    "segment",
]
