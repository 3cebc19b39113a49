"""Data models for CLI operations."""

from enum import IntEnum
from typing import Optional

from src.models.notification import Notification, NotificationKind


class ExitCode(IntEnum):
    """Exit codes for CLI operations.

    - SUCCESS (0): Operation completed successfully
    - GENERAL_ERROR (1): Configuration or local file problems
    - VALIDATION_ERROR (2): The page draft was rejected before sending
    - REQUEST_FAILED (3): The pages API reported a failure

    Example:
        >>> exit_code = ExitCode.SUCCESS
        >>> sys.exit(exit_code)
    """
    SUCCESS = 0
    GENERAL_ERROR = 1
    VALIDATION_ERROR = 2
    REQUEST_FAILED = 3

    @classmethod
    def for_notification(cls, notification: Optional[Notification]) -> 'ExitCode':
        """Map the terminal notification of an operation to an exit code."""
        if notification is None or not notification.kind.is_terminal:
            return cls.GENERAL_ERROR
        if notification.kind is NotificationKind.VALIDATION_ERROR:
            return cls.VALIDATION_ERROR
        if notification.kind.is_failure:
            return cls.REQUEST_FAILED
        return cls.SUCCESS
