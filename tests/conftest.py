"""Shared pytest fixtures and configuration for the stream-levels test suite.

Guidelines
----------
* No internet access in any test.
* yt-dlp must be mocked at the infra boundary.
* Core tests must be pure — no side effects.
* Tests must not depend on OS state.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest


@pytest.fixture(autouse=True)
def _reset_package_logger() -> Iterator[None]:
    """Undo ``configure_logging`` so caplog sees package records."""
    yield
    package_logger = logging.getLogger("stream_levels")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True
