"""Request lifecycle orchestration for page operations.

Each operation issues exactly one request through the configured transport
and reports progress as notifications on the injected sink. Operations never
raise for failed requests: the coroutine always completes and failures are
communicated as *_FAILURE notifications carrying a plain string message.

Notification sequences:
    fetch_pages   FETCH_PAGES_REQUEST, then FETCH_PAGES_SUCCESS | FETCH_PAGES_FAILURE
    fetch_page    FETCH_PAGE_REQUEST, then FETCH_PAGE_SUCCESS | FETCH_PAGE_FAILURE
    delete_page   DELETE_PAGE_SUCCESS | DELETE_PAGE_FAILURE (no request notification)
    put_page      VALIDATION_ERROR
                  or CLEAR_ERRORS, then PUT_PAGE_SUCCESS | PUT_PAGE_FAILURE
"""

import asyncio
import inspect
import logging
from typing import Any, Mapping, Optional

from src.models.notification import Notification, NotificationKind
from src.models.page import Page
from src.pages_client.config import ClientConfig

from .sinks import as_sink
from .validator import PageLike, Validator

logger = logging.getLogger(__name__)


def error_message(error: Any) -> str:
    """Normalize any failure shape to a single message string.

    Uses a non-empty ``message`` attribute first (TransportError and friends),
    then a ``message`` or ``error`` key for mapping-shaped errors, then str().

    Example:
        >>> error_message(TransportError("something awful happened"))
        'something awful happened'
        >>> error_message({'message': 'something awful happened'})
        'something awful happened'
    """
    if isinstance(error, Mapping):
        message = error.get('message') or error.get('error')
    else:
        message = getattr(error, 'message', None)
    if isinstance(message, str) and message:
        return message
    text = str(error)
    return text or type(error).__name__


def _validate_id(page_id: str) -> None:
    if not page_id or not str(page_id).strip():
        raise ValueError("page_id cannot be empty")


class PageActions:
    """Page operations bound to a transport and a notification sink.

    PageActions holds no mutable state, so several operations may run
    concurrently on the same instance. Notifications of one operation arrive
    in order; ordering across concurrent operations is unspecified.

    Example:
        >>> sink = RecordingSink()
        >>> actions = PageActions(ClientConfig.from_settings(Settings.load()), sink)
        >>> await actions.fetch_page("about.md")
        >>> sink.kinds()
        [NotificationKind.FETCH_PAGE_REQUEST, NotificationKind.FETCH_PAGE_SUCCESS]
    """

    def __init__(self, config: ClientConfig, sink: Any, validator: Optional[Validator] = None):
        """Initialize page operations.

        Args:
            config: Base URL and transport
            sink: Notification receiver (sink, callable or queue)
            validator: Rules applied by put_page (default: filename required)
        """
        self._config = config
        self._sink = as_sink(sink)
        self._validator = validator or Validator()

    def _emit(self, kind: NotificationKind, **payload: Any) -> None:
        self._sink.emit(Notification(kind=kind, **payload))

    async def _call(self, method_name: str, *args: Any) -> Any:
        """Run one transport call, awaiting coroutines and threading blocking calls."""
        method = getattr(self._config.transport, method_name)
        if inspect.iscoroutinefunction(method):
            return await method(*args)
        result = await asyncio.to_thread(method, *args)
        if inspect.isawaitable(result):
            result = await result
        return result

    def _failed(self, operation: str, error: Exception) -> str:
        message = error_message(error)
        logger.warning(f"{operation} failed against {self._config.base_url}: {message}")
        return message

    async def fetch_pages(self) -> None:
        """Fetch every page: GET /pages."""
        self._emit(NotificationKind.FETCH_PAGES_REQUEST)
        try:
            data = await self._call('get', '/pages')
            if not isinstance(data, list):
                raise TypeError(
                    f"Expected a list of pages, got {type(data).__name__}"
                )
            pages = tuple(Page.from_api(item) for item in data)
        except Exception as e:
            self._emit(
                NotificationKind.FETCH_PAGES_FAILURE,
                error=self._failed("fetch_pages", e)
            )
            return
        logger.info(f"Fetched {len(pages)} pages")
        self._emit(NotificationKind.FETCH_PAGES_SUCCESS, pages=pages)

    async def fetch_page(self, page_id: str) -> None:
        """Fetch one page: GET /pages/{page_id}.

        An empty page_id is reported as FETCH_PAGE_FAILURE without a request.
        """
        self._emit(NotificationKind.FETCH_PAGE_REQUEST)
        try:
            _validate_id(page_id)
            page = Page.from_api(await self._call('get', f"/pages/{page_id}"))
        except Exception as e:
            self._emit(
                NotificationKind.FETCH_PAGE_FAILURE,
                error=self._failed(f"fetch_page({page_id})", e)
            )
            return
        self._emit(NotificationKind.FETCH_PAGE_SUCCESS, page=page)

    async def delete_page(self, page_id: str) -> None:
        """Delete one page: DELETE /pages/{page_id}.

        No request notification is emitted for deletions. An empty page_id
        is reported as DELETE_PAGE_FAILURE without a request.
        """
        try:
            _validate_id(page_id)
            await self._call('delete', f"/pages/{page_id}")
        except Exception as e:
            self._emit(
                NotificationKind.DELETE_PAGE_FAILURE,
                error=self._failed(f"delete_page({page_id})", e)
            )
            return
        logger.info(f"Deleted page {page_id}")
        self._emit(NotificationKind.DELETE_PAGE_SUCCESS, id=page_id)

    async def put_page(self, draft: PageLike, page_id: Optional[str] = None) -> None:
        """Create or update a page from the current editor state.

        With page_id the page is updated at /pages/{page_id}, even when the
        draft carries another name. Without it the page is created at
        /pages/{draft.path}.

        Args:
            draft: Page or flattened editor snapshot (front matter plus
                   name, path and raw_content)
            page_id: Name of the page being updated, None to create
        """
        if not isinstance(draft, Page):
            draft = Page.from_metadata(draft)

        errors = self._validator.validate(draft)
        if errors:
            logger.info(f"Page draft rejected: {'; '.join(errors)}")
            self._emit(NotificationKind.VALIDATION_ERROR, errors=tuple(errors))
            return

        self._emit(NotificationKind.CLEAR_ERRORS)

        # Drafts with only a name and no explicit page_id update that name
        target = page_id or (draft.path or '').strip() or draft.name
        try:
            data = await self._call('put', f"/pages/{target}", draft.to_payload())
            page = Page.from_api(data)
        except Exception as e:
            self._emit(
                NotificationKind.PUT_PAGE_FAILURE,
                error=self._failed(f"put_page({target})", e)
            )
            return
        logger.info(f"Saved page {page.name or target}")
        self._emit(NotificationKind.PUT_PAGE_SUCCESS, page=page)
