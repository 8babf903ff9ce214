"""
Pytest configuration and shared fixtures for the inlinemod tests.

The parser is built once per session (grammar loading is the expensive part);
resolvers are cheap and created per test so no state leaks between tests.
"""

import sys
from pathlib import Path
from typing import Dict

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
sys.path.insert(0, str(Path(__file__).parent.parent))
from inlinemod.frontend.parser import Parser
from tests.test_utils import PathCommentResolver, RecordingResolver


# =============================================================================
# Session-scoped fixtures (shared across all tests)
# =============================================================================

@pytest.fixture(scope="session")
def parser():
    """Session-scoped parser; no on-disk grammar cache so tests leave nothing behind."""
    return Parser(cache_file=None)


# =============================================================================
# Function-scoped fixtures (default - one per test)
# =============================================================================

@pytest.fixture
def path_comment_resolver(parser):
    return PathCommentResolver(parser)


@pytest.fixture
def memory_crate(parser):
    """
    Factory for in-memory crates.

    Usage:
        resolver = memory_crate({"/crate/src/lib.rs": "mod a;", ...})
    """
    def _make(files: Dict[str, str]) -> RecordingResolver:
        return RecordingResolver(files, parser=parser)

    return _make


@pytest.fixture
def write_crate(tmp_path):
    """
    Factory writing a crate to disk under tmp_path.

    Returns tmp_path; keys of `files` are paths relative to it.
    """
    def _write(files: Dict[str, str]) -> Path:
        for relative, contents in files.items():
            target = tmp_path / relative
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(contents, encoding="utf-8")
        return tmp_path

    return _write
