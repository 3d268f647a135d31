"""
Chunking core.

Supports:
- Character windows sized by binary search over a length measure
- Greedy paragraph packing with unit-count overlap
- Lazy chunk production with global offsets across segments
- Range reconstruction from global offsets
"""

from .options import ChunkStrategy, SplitOptions, SplitOptionsError
from .length import LengthMeasure, token_length_function
from .units import ChunkUnit, ChunkResult, JOINER, get_units, can_fit_all_units
from .chunker import CharacterWindowChunker, GreedySlidingWindowPacker
from .producer import ChunkIterator, iterate_chunks, split
from .ranges import get_chunk

__all__ = [
    'ChunkStrategy',
    'SplitOptions',
    'SplitOptionsError',
    'LengthMeasure',
    'token_length_function',
    'ChunkUnit',
    'ChunkResult',
    'JOINER',
    'get_units',
    'can_fit_all_units',
    'CharacterWindowChunker',
    'GreedySlidingWindowPacker',
    'ChunkIterator',
    'iterate_chunks',
    'split',
    'get_chunk',
]
