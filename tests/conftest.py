"""Shared pytest configuration and fixtures for the tlafmt test suite.

Fixtures defined here are automatically available to all tests without
explicit imports.
"""

import io
import logging
import sys
from pathlib import Path

import pytest

# Add src to path for imports during testing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from tlafmt.options import FormatOptions
from tlafmt.renderer import Renderer


# ============================================================================
# Pytest Configuration
# ============================================================================

def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "integration: mark test as integration test (parses real TLA+)"
    )
    config.addinivalue_line(
        "markers", "slow: mark test as slow (>1 second execution time)"
    )


# ============================================================================
# Logging Isolation
# ============================================================================

@pytest.fixture(autouse=True)
def reset_tlafmt_logger():
    """Undo CLI logging setup so caplog sees package records in every test."""
    yield
    logger = logging.getLogger("tlafmt")
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


# ============================================================================
# Sample Specifications
# ============================================================================

SIMPLE_SPEC = """\
---- MODULE B ----
EXTENDS Naturals
VARIABLE x

Init == x = 0
====
"""


@pytest.fixture
def simple_spec() -> str:
    """A small, well-formed TLA+ module."""
    return SIMPLE_SPEC


@pytest.fixture
def temp_tla_file(tmp_path: Path) -> Path:
    """Create a temporary TLA+ file with unformatted content.

    Returns:
        Path to a temporary .tla file.
    """
    file_path = tmp_path / "Spec.tla"
    file_path.write_text("---- MODULE Spec ----\nInit == x = 0\n\n\n\nNext == x' = x + 1\n====\n")
    return file_path


# ============================================================================
# Renderer Fixtures
# ============================================================================

@pytest.fixture
def options() -> FormatOptions:
    """Default formatting options."""
    return FormatOptions()


@pytest.fixture
def sink() -> io.StringIO:
    """In-memory text sink for rendered output."""
    return io.StringIO()


@pytest.fixture
def renderer(sink: io.StringIO, options: FormatOptions) -> Renderer:
    """Renderer writing to the in-memory sink."""
    return Renderer(sink, options)
