"""Test fixtures for page tests.

This module provides sample backend page documents, editor snapshots and
local Markdown files used across unit and integration tests.
"""

from .sample_pages import (
    API_URL,
    PAGE_DOCUMENT,
    NEW_PAGE_DRAFT,
    PAGE_MARKDOWN,
)
