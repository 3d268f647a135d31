"""
Pytest configuration and fixtures.

Ensures chunk_splitter package can be imported from tests.
"""

import sys
import os
from pathlib import Path

import pytest

# Add the repository root to Python path so tests can import chunk_splitter
repo_root = Path(__file__).parent.parent
sys.path.insert(0, str(repo_root))

# Also set PYTHONPATH environment variable
os.environ['PYTHONPATH'] = str(repo_root)


@pytest.fixture(autouse=True)
def clean_config_state(monkeypatch):
    """Isolate tests from the cached config and CHUNK_SPLITTER_* variables."""
    from chunk_splitter import config

    for name in ('CHUNK_SPLITTER_CONFIG', 'CHUNK_SPLITTER_CHUNK_SIZE',
                 'CHUNK_SPLITTER_CHUNK_OVERLAP', 'CHUNK_SPLITTER_STRATEGY'):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(config, '_config_instance', None)


@pytest.fixture
def counting_length():
    """Length function recording every string it measures."""
    class CountingLength:
        def __init__(self):
            self.calls = []

        def __call__(self, text):
            self.calls.append(text)
            return float(len(text))

    return CountingLength()
