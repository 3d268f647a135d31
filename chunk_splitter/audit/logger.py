"""
Audit logging for chunking runs.

Logs one JSON event per operation. Chunk text is never logged, only
counts, offsets and settings.
"""

import logging
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional


class AuditLogger:
    """
    Structured audit logger for chunking operations.

    Features:
    - JSON event logging
    - Split runs (segment/chunk counts, settings, timing)
    - Range extractions (offsets, piece count)
    - Append-only log file
    """

    def __init__(self, log_file: str = "./audit.log", level: str = "INFO"):
        """
        Initialize audit logger.

        Args:
            log_file: Path to audit log
            level: Logging level (DEBUG, INFO, WARNING, ERROR)
        """
        self.log_file = Path(log_file)
        self.log_file.parent.mkdir(parents=True, exist_ok=True)

        self.logger = logging.getLogger("chunk_splitter_audit")
        self.logger.setLevel(getattr(logging, level.upper()))
        self.logger.propagate = False

        # File handler, one JSON event per line
        fh = logging.FileHandler(self.log_file, mode='a', encoding='utf-8')
        fh.setLevel(getattr(logging, level.upper()))
        fh.setFormatter(logging.Formatter('%(message)s'))

        # Remove existing handlers to avoid duplicates
        self.close()
        self.logger.addHandler(fh)

    def close(self):
        """Detach and close file handlers."""
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()

    def _log_event(self, event_dict: Dict[str, Any]):
        """
        Log a structured event as JSON.

        Args:
            event_dict: Event data to log
        """
        event_dict['timestamp'] = datetime.now(timezone.utc).isoformat()
        self.logger.info(json.dumps(event_dict))

    def log_split(self, num_segments: int, num_chunks: int, strategy: str,
                  chunk_size: int, chunk_overlap: int, execution_time_ms: float,
                  **kwargs):
        """
        Log a completed split run.

        Args:
            num_segments: Number of input segments
            num_chunks: Number of chunks produced
            strategy: Chunk strategy value
            chunk_size: Effective chunk size
            chunk_overlap: Effective overlap (characters or units)
            execution_time_ms: Wall time of the run
            **kwargs: Additional metadata
        """
        event = {
            "event": "split",
            "num_segments": num_segments,
            "num_chunks": num_chunks,
            "strategy": strategy,
            "chunk_size": chunk_size,
            "chunk_overlap": chunk_overlap,
            "execution_time_ms": execution_time_ms,
            **kwargs
        }
        self._log_event(event)

    def log_range_extraction(self, start: Optional[int], end: Optional[int],
                             num_pieces: int, **kwargs):
        """
        Log a range extraction.

        Args:
            start: Requested global start offset
            end: Requested global end offset (None = end of input)
            num_pieces: Number of substrings returned
            **kwargs: Additional metadata
        """
        event = {
            "event": "range_extraction",
            "start": start,
            "end": end,
            "num_pieces": num_pieces,
            **kwargs
        }
        self._log_event(event)

    def log_error(self, error_type: str, message: str, context: Optional[Dict] = None):
        """
        Log system error.

        Args:
            error_type: Type of error
            message: Error message
            context: Optional context dictionary
        """
        event = {
            "event": "error",
            "error_type": error_type,
            "message": message,
            **(context or {})
        }
        self._log_event(event)


def get_audit_logger(config: Optional[Dict[str, Any]] = None) -> AuditLogger:
    """
    Get configured audit logger instance.

    Args:
        config: Audit config dict with 'file' and 'level' keys

    Returns:
        AuditLogger instance
    """
    if config is None:
        config = {'file': './audit.log', 'level': 'INFO'}

    return AuditLogger(
        log_file=config.get('file', './audit.log'),
        level=config.get('level', 'INFO')
    )
