"""
Chunk Splitter - bounded, overlapping text chunks with exact offsets.

Splits a sequence of text segments into chunks for embedding and indexing
pipelines, and maps any chunk back to its range in the original input.
"""

__version__ = "1.0.0"

from chunk_splitter.config import SplitterConfig, ConfigError, load_config
from chunk_splitter.splitter import (
    ChunkIterator,
    ChunkResult,
    ChunkStrategy,
    SplitOptions,
    SplitOptionsError,
    get_chunk,
    iterate_chunks,
    split,
    token_length_function,
)

__all__ = [
    'SplitterConfig',
    'ConfigError',
    'load_config',
    'ChunkIterator',
    'ChunkResult',
    'ChunkStrategy',
    'SplitOptions',
    'SplitOptionsError',
    'get_chunk',
    'iterate_chunks',
    'split',
    'token_length_function',
]
