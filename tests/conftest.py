"""
Pytest configuration and shared fixtures for merkle_commit tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Resets the process-wide default config around every test
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

from fixtures.common import SAMPLE_LEAVES, make_leaves  # noqa: E402

from merkle_commit.config.runtime import set_default_config  # noqa: E402
from merkle_commit.crypto.hashing import Hasher  # noqa: E402


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture(autouse=True)
def _reset_default_config(monkeypatch):
    """Keep env vars and the cached default config from leaking between tests."""
    for var in ("MERKLE_TEXT_ENCODING", "MERKLE_LOG_LEVEL", "MERKLE_DEBUG"):
        monkeypatch.delenv(var, raising=False)
    set_default_config(None)
    yield
    set_default_config(None)


@pytest.fixture
def sample_leaves():
    """The five-leaf scenario ["abc", "bcd", "cde", "def", "efg"]."""
    return list(SAMPLE_LEAVES)


@pytest.fixture
def hasher():
    """A default BLAKE2b-512 Hasher."""
    return Hasher()


@pytest.fixture
def leaves_factory():
    """Factory for n distinct text leaves."""
    return make_leaves
