"""
Lazy chunk production over a sequence of segments.

Segments are logically concatenated without separators; every emitted
ChunkResult carries offsets into that concatenation. Chunks are produced one
pull at a time, consuming a segment only when the pending chunks of the
previous one are exhausted.
"""

from collections import deque
from typing import Any, Deque, Dict, Iterable, List, Optional, Union
import logging

from chunk_splitter.splitter.chunker import CharacterWindowChunker, GreedySlidingWindowPacker
from chunk_splitter.splitter.length import LengthMeasure
from chunk_splitter.splitter.options import ChunkStrategy, SplitOptions, resolve_options
from chunk_splitter.splitter.units import (
    JOINER,
    ChunkResult,
    ChunkUnit,
    can_fit_all_units,
    get_units,
)

logger = logging.getLogger(__name__)


class ChunkIterator:
    """
    Forward-only, single-use chunk producer.

    Use ``pull()`` for an explicit cursor (returns None once exhausted) or
    iterate it like any Python iterator. Not safe for concurrent pulls.
    """

    def __init__(self, text: Iterable[str],
                 split_options: Union[SplitOptions, Dict[str, Any], None] = None):
        """
        Initialize producer.

        Args:
            text: Ordered segments; copied so the caller's list is untouched
            split_options: SplitOptions, an options dict, or None for defaults

        Raises:
            SplitOptionsError: If options are malformed
        """
        self.split_options = resolve_options(split_options)
        self.measure = LengthMeasure(self.split_options.length_function)

        self._segments: Deque[str] = deque(text)
        self._chunk_units: Deque[ChunkUnit] = deque()
        # Added to queued unit offsets; 0 for character units (already global).
        self._chunk_unit_global_offset = 0
        self._global_offset = 0

        self._character_chunker = CharacterWindowChunker(
            chunk_size=self.split_options.chunk_size,
            overlap=self.split_options.chunk_overlap,
            measure=self.measure,
        )
        self._packer = GreedySlidingWindowPacker(
            chunk_size=self.split_options.chunk_size,
            overlap=self.split_options.chunk_overlap,
            joiner=JOINER,
        )

    @property
    def global_offset(self) -> int:
        """Characters consumed from the input so far."""
        return self._global_offset

    def _generate_chunk_result(self, chunk_unit: ChunkUnit) -> ChunkResult:
        return ChunkResult(
            text=[chunk_unit.text],
            start=self._chunk_unit_global_offset + chunk_unit.start,
            end=self._chunk_unit_global_offset + chunk_unit.end,
        )

    def _paragraph_units(self, segment: str) -> List[ChunkUnit]:
        units = get_units(segment)
        if not units:
            return []

        joiner_length = self.measure(JOINER)
        unit_lengths = [self.measure(unit.text) for unit in units]

        if can_fit_all_units(unit_lengths, joiner_length, self.split_options.chunk_size):
            logger.debug("Paragraph units fit verbatim (%d units)", len(units))
            return units

        logger.debug("Packing %d paragraph units", len(units))
        return self._packer.pack(units, unit_lengths, joiner_length)

    def _refill(self, segment: str) -> None:
        """Chunk one non-empty segment into the pending queue."""
        strategy = self.split_options.chunk_strategy

        if strategy is ChunkStrategy.PARAGRAPH:
            self._chunk_unit_global_offset = self._global_offset
            self._chunk_units.extend(self._paragraph_units(segment))
        elif strategy is ChunkStrategy.CHARACTER:
            self._chunk_unit_global_offset = 0
            self._chunk_units.extend(
                self._character_chunker.chunk_text(segment, start_offset=self._global_offset)
            )
        else:
            raise AssertionError(f"Unhandled chunk strategy: {strategy}")

        self._global_offset += len(segment)

    def pull(self) -> Optional[ChunkResult]:
        """
        Produce the next chunk.

        Returns:
            The next ChunkResult, or None once all input is consumed
        """
        while True:
            if self._chunk_units:
                return self._generate_chunk_result(self._chunk_units.popleft())

            if not self._segments:
                return None

            segment = self._segments.popleft()

            if not segment:
                # Keep the position of intentionally empty segments.
                self._chunk_unit_global_offset = self._global_offset
                return self._generate_chunk_result(ChunkUnit(text="", start=0, end=0))

            self._refill(segment)

    def __iter__(self) -> "ChunkIterator":
        return self

    def __next__(self) -> ChunkResult:
        chunk = self.pull()
        if chunk is None:
            raise StopIteration
        return chunk


def iterate_chunks(text: Iterable[str],
                   split_options: Union[SplitOptions, Dict[str, Any], None] = None) -> ChunkIterator:
    """Create a lazy chunk producer over the given segments."""
    return ChunkIterator(text, split_options)


def split(text: Iterable[str],
          split_options: Union[SplitOptions, Dict[str, Any], None] = None) -> List[ChunkResult]:
    """
    Split segments into chunks eagerly.

    Args:
        text: Ordered segments
        split_options: SplitOptions, an options dict, or None for defaults

    Returns:
        Every chunk the producer yields, in order
    """
    return list(iterate_chunks(text, split_options))
