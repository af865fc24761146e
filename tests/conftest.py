"""
Pytest configuration and shared fixtures for stencil tests.
"""

import io
import sys
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from stencil_core.logging import LogConfig, StencilLogger  # noqa: E402
from stencil_core.types import LogFormat, LogLevel  # noqa: E402


# =============================================================================
# Logging Fixtures
# =============================================================================


@pytest.fixture
def log_stream() -> io.StringIO:
    """In-memory stream collecting log lines."""
    return io.StringIO()


@pytest.fixture
def json_logger(log_stream: io.StringIO) -> StencilLogger:
    """Debug-level JSON logger writing to log_stream."""
    return StencilLogger(
        LogConfig(level=LogLevel.DEBUG, format=LogFormat.JSON, output=log_stream)
    )


# =============================================================================
# Markers Configuration
# =============================================================================


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "property: Hypothesis property-based tests")
