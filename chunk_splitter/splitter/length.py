"""
Length measures used by every chunking decision.

Default: code point count (not bytes, not grapheme clusters).
Custom: any synchronous callable ``str -> float``, e.g. a token counter.
"""

from typing import Callable, Optional
import logging

logger = logging.getLogger(__name__)


class LengthMeasure:
    """Measures text with the default count or a caller-supplied function."""

    def __init__(self, length_function: Optional[Callable[[str], float]] = None):
        self.length_function = length_function

    def __call__(self, text: str) -> float:
        if self.length_function is None:
            return float(len(text))
        return float(self.length_function(text))


def token_length_function(encoding_name: str = "cl100k_base") -> Callable[[str], float]:
    """
    Build a token-count length function backed by tiktoken.

    Args:
        encoding_name: tiktoken encoding (cl100k_base, o200k_base, ...)

    Returns:
        Callable returning the number of tokens in a string

    Raises:
        SplitOptionsError: If tiktoken is not installed or the encoding is unknown
    """
    from chunk_splitter.splitter.options import SplitOptionsError

    try:
        import tiktoken  # lazy import, optional extra
    except ImportError as e:
        raise SplitOptionsError(
            "Token lengths need tiktoken: pip install 'chunk-splitter[tokens]'"
        ) from e

    try:
        encoding = tiktoken.get_encoding(encoding_name)
    except (KeyError, ValueError) as e:
        raise SplitOptionsError(f"Unknown tiktoken encoding: {encoding_name}") from e

    logger.debug("Using tiktoken encoding %s for chunk lengths", encoding_name)

    def _token_length(text: str) -> float:
        return float(len(encoding.encode(text, disallowed_special=())))

    return _token_length
