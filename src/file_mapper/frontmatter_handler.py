"""YAML frontmatter parsing and generation for local page files.

Local pages are Markdown files whose YAML frontmatter holds the page
metadata (title, layout, ...). An optional ``path`` key sets where the page
is created on the backend; otherwise the file name is used.
"""

import os
import re
from typing import Optional, Tuple

import yaml

from src.models.page import Page

from .errors import FilesystemError, FrontmatterError


class FrontmatterHandler:
    """Converts between Markdown files with frontmatter and Page objects.

    Frontmatter format:
        ---
        title: About
        layout: page
        path: about.md        # optional, defaults to the file name
        ---
        Body content
    """

    # YAML frontmatter between --- delimiters, empty blocks included
    FRONTMATTER_PATTERN = re.compile(
        r'^---[ \t]*\n(.*?)^---[ \t]*(?:\n|\Z)',
        re.DOTALL | re.MULTILINE
    )

    # Maximum allowed depth for YAML structures to prevent DoS attacks
    MAX_YAML_DEPTH = 10

    @classmethod
    def _validate_yaml_depth(cls, obj, current_depth: int = 0, max_depth: int = MAX_YAML_DEPTH) -> None:
        """Validate that YAML structure depth doesn't exceed maximum.

        Raises:
            FrontmatterError: If depth exceeds maximum
        """
        if current_depth > max_depth:
            raise FrontmatterError(
                "<yaml>",
                f"YAML structure exceeds maximum depth of {max_depth}"
            )

        if isinstance(obj, dict):
            for value in obj.values():
                cls._validate_yaml_depth(value, current_depth + 1, max_depth)
        elif isinstance(obj, list):
            for item in obj:
                cls._validate_yaml_depth(item, current_depth + 1, max_depth)

    @classmethod
    def extract_frontmatter_and_content(cls, content: str, file_path: str = "<unknown>") -> Tuple[dict, str]:
        """Extract frontmatter dict and content separately.

        Returns:
            Tuple of (frontmatter_dict, markdown_content).
            Returns ({}, content) if no frontmatter found.

        Raises:
            FrontmatterError: If the frontmatter is not a valid YAML mapping
        """
        match = cls.FRONTMATTER_PATTERN.match(content)
        if not match:
            return {}, content

        frontmatter_str = match.group(1)
        markdown_content = content[match.end():]

        try:
            frontmatter = yaml.safe_load(frontmatter_str)
        except yaml.YAMLError as e:
            raise FrontmatterError(
                file_path,
                f"Invalid YAML syntax: {str(e)}"
            )

        # Empty block
        if frontmatter is None:
            return {}, markdown_content

        if not isinstance(frontmatter, dict):
            raise FrontmatterError(
                file_path,
                f"Frontmatter must be a YAML dictionary, got {type(frontmatter).__name__}"
            )

        try:
            cls._validate_yaml_depth(frontmatter)
        except FrontmatterError as e:
            raise FrontmatterError(file_path, e.message)

        return frontmatter, markdown_content

    @classmethod
    def parse(cls, file_path: str, content: str) -> Page:
        """Parse a local file into a draft Page.

        Args:
            file_path: Path to the file (default page path and error messages)
            content: Full file content including frontmatter

        Returns:
            Page with no name, the frontmatter as metadata and the body as content

        Raises:
            FrontmatterError: If frontmatter is malformed or has invalid YAML
        """
        frontmatter, body = cls.extract_frontmatter_and_content(content, file_path)
        path = frontmatter.pop('path', None) or os.path.basename(file_path)
        return Page(
            name=None,
            path=str(path),
            metadata=frontmatter,
            content=body,
        )

    @classmethod
    def generate(cls, page: Page) -> str:
        """Render a Page as Markdown with YAML frontmatter.

        A frontmatter block is always written, even when empty, since the
        backend treats files without one as static files. The page path is
        written as the first key so parse() restores it.
        """
        frontmatter = {'path': page.path} if page.path else {}
        frontmatter.update(
            (key, value) for key, value in page.metadata.items() if key != 'path'
        )
        if frontmatter:
            yaml_str = yaml.safe_dump(
                frontmatter,
                default_flow_style=False,
                allow_unicode=True,
                sort_keys=False
            )
        else:
            yaml_str = ""
        return f"---\n{yaml_str}---\n{page.content}"

    @classmethod
    def read(cls, file_path: str) -> Page:
        """Read and parse a local page file.

        Raises:
            FilesystemError: If the file cannot be read
            FrontmatterError: If frontmatter is malformed
        """
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            raise FilesystemError(file_path, 'read', 'File not found')
        except PermissionError:
            raise FilesystemError(file_path, 'read', 'Permission denied')
        except OSError as e:
            raise FilesystemError(file_path, 'read', str(e))
        return cls.parse(file_path, content)

    @classmethod
    def write(cls, file_path: str, page: Page) -> None:
        """Write a Page to a local file, creating parent directories.

        Raises:
            FilesystemError: If the file cannot be written
        """
        directory: Optional[str] = os.path.dirname(file_path)
        try:
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(file_path, 'w', encoding='utf-8') as f:
                f.write(cls.generate(page))
        except PermissionError:
            raise FilesystemError(file_path, 'write', 'Permission denied')
        except OSError as e:
            raise FilesystemError(file_path, 'write', str(e))
