"""Command-line interface for the pages API.

This package provides the `pages-admin` CLI tool that lists, fetches,
deletes and upserts pages through the page operations, with progress
indication and error reporting.
"""

from .models import ExitCode
from .output import OutputHandler

__all__ = [
    'ExitCode',
    'OutputHandler',
]
