"""Root pytest configuration for all tests.

This conftest applies to all test types (unit, integration).
"""

import logging

import pytest

from src.page_actions.sinks import RecordingSink
from tests.fixtures.sample_pages import PAGE_DOCUMENT

# Keep urllib3 connection-pool chatter out of captured logs
logging.getLogger("urllib3").setLevel(logging.WARNING)


@pytest.fixture
def sink():
    """A fresh recording sink."""
    return RecordingSink()


@pytest.fixture
def page_document():
    """A copy of the sample backend page document."""
    return dict(PAGE_DOCUMENT)
