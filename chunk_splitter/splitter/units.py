"""Chunk data types, paragraph unit extraction and the paragraph fit check."""

from dataclasses import dataclass, field, asdict
from typing import List, Dict, Any, Sequence
import re

PARAGRAPH_BREAK = re.compile(r'\n{2,}')

# Inserted between packed paragraph units.
JOINER = "\n\n"


@dataclass
class ChunkUnit:
    """
    A piece of text with its offset span, before it is surfaced as output.

    Character-window units carry global offsets. Paragraph units carry
    segment-local offsets bounding the pre-trim paragraph region, so
    ``end - start`` may exceed ``len(text)``.
    """

    text: str
    start: int
    end: int


@dataclass
class ChunkResult:
    """Public output unit; ``start``/``end`` are global character offsets."""

    text: List[str] = field(default_factory=list)
    start: int = 0
    end: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def get_units(text: str) -> List[ChunkUnit]:
    """
    Split a segment into paragraph units at runs of two or more newlines.

    Each unit's text is stripped; units that strip to nothing are dropped.
    ``start``/``end`` are the unstripped span between break runs.

    Args:
        text: One input segment

    Returns:
        Ordered, non-overlapping paragraph units
    """
    units = []
    last_index = 0

    for match in PARAGRAPH_BREAK.finditer(text):
        end = match.start()
        unit = text[last_index:end].strip()
        if unit:
            units.append(ChunkUnit(text=unit, start=last_index, end=end))
        last_index = match.end()

    last_unit = text[last_index:].strip()
    if last_unit:
        units.append(ChunkUnit(text=last_unit, start=last_index, end=len(text)))

    return units


def can_fit_all_units(unit_lengths: Sequence[float], joiner_length: float,
                      chunk_size: int) -> bool:
    """
    Check whether units joined together fit in one chunk.

    Args:
        unit_lengths: Measured length of each unit, in order
        joiner_length: Measured length of the joiner
        chunk_size: Size budget

    Returns:
        True iff every unit fits on its own and the joined total fits
    """
    if any(length > chunk_size for length in unit_lengths):
        return False

    joiners = max(len(unit_lengths) - 1, 0) * joiner_length
    return sum(unit_lengths) + joiners <= chunk_size
