"""Reconstruct text across segments from a global character range."""

from typing import List, Optional, Sequence


def get_chunk(text: Sequence[str], start: Optional[int] = None,
              end: Optional[int] = None) -> List[str]:
    """
    Return the pieces of ``text`` covering the global range [start, end).

    Offsets index the concatenation of all segments. Pieces spanning more
    than one segment have empty strings removed.

    Args:
        text: Ordered segments
        start: Global start offset (default 0)
        end: Global exclusive end offset (default: end of input)

    Returns:
        Substrings in order; empty if start lies beyond the input or end < start
    """
    start_value = max(start or 0, 0)
    end_value = end

    if end_value is not None and end_value < start_value:
        return []

    current_length = 0
    start_index = None
    start_offset = 0
    end_index = None
    end_offset = 0

    for i, line in enumerate(text):
        row_length = len(line)
        current_length += row_length

        if start_index is None and current_length >= start_value:
            start_index = i
            start_offset = row_length - (current_length - start_value)

        if end_value is not None and current_length > end_value:
            end_index = i
            end_offset = row_length - (current_length - end_value)
            break

    if start_index is None:
        return []

    if end_index is None:
        end_index = len(text) - 1
        end_offset = len(text[end_index])

    if start_index == end_index:
        return [text[start_index][start_offset:end_offset]]

    pieces = [text[start_index][start_offset:]]
    pieces.extend(text[start_index + 1:end_index])
    pieces.append(text[end_index][:end_offset])

    return [piece for piece in pieces if piece]
