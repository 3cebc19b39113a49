"""Local page files with YAML frontmatter.

This package maps between Markdown files on disk and Page objects so pages
can be edited locally and pushed through the page operations.
"""

from .errors import FileMapperError, FilesystemError, FrontmatterError
from .frontmatter_handler import FrontmatterHandler

__all__ = [
    'FileMapperError',
    'FilesystemError',
    'FrontmatterError',
    'FrontmatterHandler',
]
