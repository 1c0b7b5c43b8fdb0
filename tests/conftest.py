"""
Shared fixtures for the test suite.
"""

import logging
from unittest.mock import MagicMock

import pytest


@pytest.fixture
def error_logger() -> MagicMock:
    """Stand-in for the injected error logger."""
    return MagicMock(spec=logging.Logger)
