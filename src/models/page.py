"""Page data model."""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

# Keys of the backend page document that are not front matter
_API_FIELDS = ('name', 'path', 'front_matter', 'raw_content')

# Keys of a flattened editor snapshot that are not front matter
_SNAPSHOT_FIELDS = ('name', 'path', 'raw_content')


@dataclass(frozen=True)
class Page:
    """A page document stored by the content backend.

    Attributes:
        name: Unique identifier (None for a page that was never saved)
        path: Filesystem-style location, used to create a page with no name
        metadata: Front matter (title, layout, ...)
        content: Raw body text
        extra: Server fields not modelled above (http_url, api_url, ...)
    """
    name: Optional[str] = None
    path: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)
    content: str = ""
    extra: Dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def title(self) -> Optional[str]:
        value = self.metadata.get('title')
        return str(value) if value is not None else None

    @property
    def is_new(self) -> bool:
        """True when the page has never been persisted."""
        return not self.name

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> 'Page':
        """Build a Page from a backend page document.

        Args:
            data: Decoded JSON object with name, path, front_matter, raw_content

        Returns:
            Page with unknown keys preserved in ``extra``

        Raises:
            TypeError: If data is not a mapping
        """
        if not isinstance(data, Mapping):
            raise TypeError(
                f"Page document must be an object, got {type(data).__name__}"
            )
        front_matter = data.get('front_matter') or {}
        return cls(
            name=data.get('name'),
            path=data.get('path'),
            metadata=dict(front_matter),
            content=data.get('raw_content') or "",
            extra={k: v for k, v in data.items() if k not in _API_FIELDS},
        )

    @classmethod
    def from_metadata(cls, snapshot: Mapping[str, Any]) -> 'Page':
        """Build a draft Page from a flattened editor snapshot.

        Editors keep ``name``, ``path`` and ``raw_content`` next to the front
        matter keys; everything else is treated as front matter.
        """
        return cls(
            name=snapshot.get('name'),
            path=snapshot.get('path'),
            metadata={k: v for k, v in snapshot.items() if k not in _SNAPSHOT_FIELDS},
            content=snapshot.get('raw_content') or "",
        )

    def to_payload(self) -> Dict[str, Any]:
        """Build the PUT request body for this page."""
        payload: Dict[str, Any] = {
            'front_matter': dict(self.metadata),
            'raw_content': self.content,
        }
        if self.path:
            payload['path'] = self.path
        return payload


PageCollection = Tuple[Page, ...]
