"""Notification data model.

Notifications describe request lifecycle transitions of page operations.
They are created once, handed to a sink and never mutated afterwards.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from src.models.page import Page, PageCollection


class NotificationKind(str, Enum):
    """Closed set of notification kinds emitted by page operations."""
    FETCH_PAGES_REQUEST = "FETCH_PAGES_REQUEST"
    FETCH_PAGES_SUCCESS = "FETCH_PAGES_SUCCESS"
    FETCH_PAGES_FAILURE = "FETCH_PAGES_FAILURE"
    FETCH_PAGE_REQUEST = "FETCH_PAGE_REQUEST"
    FETCH_PAGE_SUCCESS = "FETCH_PAGE_SUCCESS"
    FETCH_PAGE_FAILURE = "FETCH_PAGE_FAILURE"
    DELETE_PAGE_SUCCESS = "DELETE_PAGE_SUCCESS"
    DELETE_PAGE_FAILURE = "DELETE_PAGE_FAILURE"
    PUT_PAGE_SUCCESS = "PUT_PAGE_SUCCESS"
    PUT_PAGE_FAILURE = "PUT_PAGE_FAILURE"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    CLEAR_ERRORS = "CLEAR_ERRORS"

    @property
    def is_failure(self) -> bool:
        return self.name.endswith('_FAILURE') or self is NotificationKind.VALIDATION_ERROR

    @property
    def is_terminal(self) -> bool:
        """True for the kinds that end an operation."""
        return not (
            self.name.endswith('_REQUEST') or self is NotificationKind.CLEAR_ERRORS
        )


@dataclass(frozen=True)
class Notification:
    """A single lifecycle message.

    At most one payload field is set, depending on ``kind``:
        pages: FETCH_PAGES_SUCCESS
        page: FETCH_PAGE_SUCCESS, PUT_PAGE_SUCCESS
        id: DELETE_PAGE_SUCCESS
        errors: VALIDATION_ERROR
        error: every *_FAILURE kind
    """
    kind: NotificationKind
    pages: Optional[PageCollection] = None
    page: Optional[Page] = None
    id: Optional[str] = None
    errors: Optional[Tuple[str, ...]] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Render as ``{"type": kind, <payload>}`` for queue or JSON consumers."""
        result: Dict[str, Any] = {'type': self.kind.value}
        if self.pages is not None:
            result['pages'] = list(self.pages)
        if self.page is not None:
            result['page'] = self.page
        if self.id is not None:
            result['id'] = self.id
        if self.errors is not None:
            result['errors'] = list(self.errors)
        if self.error is not None:
            result['error'] = self.error
        return result
