"""
Text chunking strategies for segment splitting.

- CharacterWindowChunker: maximal measured windows found by binary search
- GreedySlidingWindowPacker: first-fit packing of paragraph units
"""

import logging
from typing import List, Optional, Sequence

from chunk_splitter.splitter.length import LengthMeasure
from chunk_splitter.splitter.units import ChunkUnit, JOINER

logger = logging.getLogger(__name__)


class CharacterWindowChunker:
    """Chunks text into overlapping windows bounded by measured length."""

    def __init__(self, chunk_size: int = 512, overlap: int = 0,
                 measure: Optional[LengthMeasure] = None):
        """
        Initialize chunker.

        Args:
            chunk_size: Maximum measured length per window.
            overlap: Characters shared between consecutive windows.
            measure: Length measure; code point count if omitted.
        """
        self.chunk_size = chunk_size
        self.overlap = overlap
        self.measure = measure or LengthMeasure()

    def _largest_end(self, text: str, start: int) -> int:
        """
        Binary search the largest end with measure(text[start:end]) <= chunk_size.

        Assumes the measure never decreases as the window grows. Returns
        ``start + 1`` when even one character is over budget. The upper
        bound is found by doubling the window first, so slices stay close
        to the chunk length instead of running to the end of the segment.
        """
        text_len = len(text)
        best_end = start + 1

        if self.measure(text[start:best_end]) > self.chunk_size:
            return best_end

        step = 1
        while True:
            probe = min(best_end + step, text_len)
            if probe == best_end:
                return best_end
            if self.measure(text[start:probe]) > self.chunk_size:
                break
            best_end = probe
            step *= 2

        low = best_end + 1
        high = probe - 1

        while low <= high:
            mid = (low + high) // 2
            if self.measure(text[start:mid]) <= self.chunk_size:
                best_end = mid
                low = mid + 1
            else:
                high = mid - 1

        return best_end

    def chunk_text(self, text: str, start_offset: int = 0) -> List[ChunkUnit]:
        """
        Chunk one segment into windows covering all of it.

        Args:
            text: Segment to chunk.
            start_offset: Global offset at which the segment begins.

        Returns:
            Units with global offsets, in order.
        """
        chunks = []
        text_len = len(text)
        start = 0

        while start < text_len:
            end = self._largest_end(text, start)

            chunks.append(ChunkUnit(
                text=text[start:end],
                start=start_offset + start,
                end=start_offset + end,
            ))

            if end >= text_len:
                break

            if self.overlap > 0:
                start = max(end - self.overlap, start + 1)
            else:
                start = end

        return chunks


class GreedySlidingWindowPacker:
    """
    Packs paragraph units into windows of at most chunk_size.

    Overlap is a unit count. A unit longer than chunk_size on its own is
    emitted as a single oversized chunk rather than split.
    """

    def __init__(self, chunk_size: int = 512, overlap: int = 0, joiner: str = JOINER):
        self.chunk_size = chunk_size
        self.overlap = overlap
        self.joiner = joiner

    def pack(self, units: Sequence[ChunkUnit], unit_lengths: Sequence[float],
             joiner_length: float) -> List[ChunkUnit]:
        """
        Pack units greedily, left to right, never reordering them.

        Args:
            units: Paragraph units of one segment (segment-local offsets).
            unit_lengths: Measured length of each unit.
            joiner_length: Measured length of the joiner.

        Returns:
            Combined units spanning first to last member, segment-local.
        """
        chunks = []
        n = len(units)
        i = 0

        while i < n:
            current_len = 0.0
            j = i

            while j < n:
                simulated_len = current_len + unit_lengths[j]
                if j > i:
                    simulated_len += joiner_length
                if simulated_len > self.chunk_size and j > i:
                    break
                current_len = simulated_len
                j += 1

            if current_len > self.chunk_size:
                logger.warning(
                    "Paragraph unit at [%s, %s) measures %s > chunk_size=%s; emitting oversized chunk",
                    units[i].start, units[i].end, current_len, self.chunk_size,
                )

            chunks.append(ChunkUnit(
                text=self.joiner.join(u.text for u in units[i:j]),
                start=units[i].start,
                end=units[j - 1].end,
            ))

            if self.overlap > 0:
                i += max(1, (j - i) - self.overlap)
            else:
                i = j

        return chunks
