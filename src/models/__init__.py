"""Data models for pages and lifecycle notifications."""

from src.models.page import Page, PageCollection
from src.models.notification import Notification, NotificationKind

__all__ = ['Page', 'PageCollection', 'Notification', 'NotificationKind']
