"""
Split options and chunking strategy selection.

IMPORTANT: ``chunk_overlap`` means different things per strategy.
- CHARACTER: number of characters shared by consecutive windows.
- PARAGRAPH: number of paragraph units shared by consecutive packed chunks.
The same numeric value therefore produces very different overlap amounts
when switching strategies.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Optional, Union

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 512
DEFAULT_CHUNK_OVERLAP = 0

LengthFunction = Callable[[str], float]


class SplitOptionsError(ValueError):
    """Raised when split options are malformed."""
    pass


class ChunkStrategy(Enum):
    """Closed set of chunking strategies."""

    CHARACTER = "character"
    PARAGRAPH = "paragraph"

    @classmethod
    def parse(cls, value: Union["ChunkStrategy", str, None]) -> "ChunkStrategy":
        """
        Resolve a strategy from an enum member, its value or its name.

        Args:
            value: Strategy, string such as "paragraph", or None for default

        Returns:
            ChunkStrategy member

        Raises:
            SplitOptionsError: If the name is unknown
        """
        if value is None:
            return cls.CHARACTER
        if isinstance(value, cls):
            return value

        name = str(value).strip().lower()
        for member in cls:
            if name in (member.value, member.name.lower()):
                return member
        raise SplitOptionsError(f"Unknown chunk strategy: {value}")


@dataclass
class SplitOptions:
    """
    Options controlling a chunking session.

    Attributes:
        chunk_size: Maximum measured length of a chunk (>= 1)
        chunk_overlap: Characters (CHARACTER) or paragraph units (PARAGRAPH)
            repeated between consecutive chunks
        length_function: Optional measure ``str -> float``; defaults to
            code point count
        chunk_strategy: CHARACTER (default) or PARAGRAPH
    """

    chunk_size: int = DEFAULT_CHUNK_SIZE
    chunk_overlap: int = DEFAULT_CHUNK_OVERLAP
    length_function: Optional[LengthFunction] = None
    chunk_strategy: ChunkStrategy = ChunkStrategy.CHARACTER

    def __post_init__(self):
        self.chunk_strategy = ChunkStrategy.parse(self.chunk_strategy)

        if self.chunk_size is None:
            self.chunk_size = DEFAULT_CHUNK_SIZE
        if self.chunk_overlap is None:
            self.chunk_overlap = DEFAULT_CHUNK_OVERLAP

        if isinstance(self.chunk_size, bool) or not isinstance(self.chunk_size, int):
            raise SplitOptionsError(f"chunk_size must be an integer, got {self.chunk_size!r}")
        if isinstance(self.chunk_overlap, bool) or not isinstance(self.chunk_overlap, int):
            raise SplitOptionsError(f"chunk_overlap must be an integer, got {self.chunk_overlap!r}")
        if self.chunk_size < 1:
            raise SplitOptionsError(f"chunk_size must be >= 1, got {self.chunk_size}")
        if self.chunk_overlap < 0:
            raise SplitOptionsError(f"chunk_overlap must be >= 0, got {self.chunk_overlap}")
        if self.length_function is not None and not callable(self.length_function):
            raise SplitOptionsError("length_function must be callable")

        if self.chunk_overlap >= self.chunk_size:
            clamped = self.chunk_size - 1
            logger.warning(
                "chunk_overlap=%s is not smaller than chunk_size=%s; clamping to %s",
                self.chunk_overlap, self.chunk_size, clamped,
            )
            self.chunk_overlap = clamped

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SplitOptions":
        """
        Build options from a plain mapping.

        Unset keys fall back to defaults. Unknown keys are rejected so that
        typos such as ``chunk_overlaps`` do not pass silently.
        """
        known = {'chunk_size', 'chunk_overlap', 'length_function', 'chunk_strategy'}
        unknown = set(data) - known
        if unknown:
            raise SplitOptionsError(f"Unknown split options: {', '.join(sorted(unknown))}")

        return cls(
            chunk_size=data.get('chunk_size', DEFAULT_CHUNK_SIZE),
            chunk_overlap=data.get('chunk_overlap', DEFAULT_CHUNK_OVERLAP),
            length_function=data.get('length_function'),
            chunk_strategy=data.get('chunk_strategy'),
        )


def resolve_options(split_options: Union[SplitOptions, Dict[str, Any], None]) -> SplitOptions:
    """Normalise ``None``, a dict, or a SplitOptions into SplitOptions."""
    if split_options is None:
        return SplitOptions()
    if isinstance(split_options, SplitOptions):
        return split_options
    if isinstance(split_options, dict):
        return SplitOptions.from_dict(split_options)
    raise SplitOptionsError(f"Unsupported split options type: {type(split_options).__name__}")
