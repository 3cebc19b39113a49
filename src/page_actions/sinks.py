"""Notification sinks.

A sink is anything with an ``emit(notification)`` method. Page operations
receive one at construction and hand it every notification in order; the
adapters below cover callbacks, channels and test recording.
"""

import asyncio
import logging
import queue
from typing import Any, Callable, List, Optional

from src.models.notification import Notification, NotificationKind

logger = logging.getLogger(__name__)


class CallbackSink:
    """Forwards each notification to a synchronous callback (dispatch)."""

    def __init__(self, callback: Callable[[Notification], Any]):
        self._callback = callback

    def emit(self, notification: Notification) -> None:
        self._callback(notification)


class QueueSink:
    """Puts notifications on an asyncio.Queue or queue.Queue.

    The queue should be unbounded; a full queue raises instead of blocking
    so an operation never suspends while emitting.
    """

    def __init__(self, channel):
        self.channel = channel

    def emit(self, notification: Notification) -> None:
        self.channel.put_nowait(notification)


class RecordingSink:
    """Keeps every notification in emission order.

    Example:
        >>> sink = RecordingSink()
        >>> await PageActions(config, sink).fetch_pages()
        >>> sink.kinds()
        [NotificationKind.FETCH_PAGES_REQUEST, NotificationKind.FETCH_PAGES_SUCCESS]
    """

    def __init__(self):
        self.notifications: List[Notification] = []

    def emit(self, notification: Notification) -> None:
        self.notifications.append(notification)

    def kinds(self) -> List[NotificationKind]:
        return [n.kind for n in self.notifications]

    def clear(self) -> None:
        self.notifications.clear()


class LoggingSink:
    """Logs each notification and forwards it to an optional inner sink."""

    def __init__(self, inner: Optional[Any] = None, log: Optional[logging.Logger] = None):
        self._inner = inner
        self._log = log or logger

    def emit(self, notification: Notification) -> None:
        if notification.kind.is_failure:
            detail = notification.error or ', '.join(notification.errors or ())
            self._log.warning(f"{notification.kind.value}: {detail}")
        else:
            self._log.debug(notification.kind.value)
        if self._inner is not None:
            self._inner.emit(notification)


def as_sink(target: Any):
    """Adapt a callable or queue to the sink interface.

    Objects that already have ``emit`` are returned unchanged.

    Raises:
        TypeError: If target cannot receive notifications
    """
    if callable(getattr(target, 'emit', None)):
        return target
    if isinstance(target, (asyncio.Queue, queue.Queue)):
        return QueueSink(target)
    if callable(target):
        return CallbackSink(target)
    raise TypeError(
        f"Cannot use {type(target).__name__} as a notification sink"
    )
