"""
CLI Test Fixtures.

The CLI tests patch out setup_logging, so structlog would fall back to its
default logger, which prints to stdout. Route it to stderr, as the real
callback does, so command output on stdout stays machine readable.
"""

import sys
from collections.abc import Generator

import pytest
import structlog


@pytest.fixture(autouse=True)
def structlog_to_stderr() -> Generator[None, None, None]:
    structlog.configure(logger_factory=structlog.PrintLoggerFactory(sys.stderr))
    yield
    structlog.reset_defaults()
