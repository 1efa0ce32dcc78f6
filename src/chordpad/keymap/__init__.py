from .matcher import ActionFactory, ChordMatcher, ChordToken, parse_sequence
from .registry import GLOBAL_SCOPE, KeymapRegistry

__all__ = [
    "ActionFactory",
    "ChordMatcher",
    "ChordToken",
    "parse_sequence",
    "GLOBAL_SCOPE",
    "KeymapRegistry",
]
